"""Workspace role assignments.

Maps (location, workspace, user email) to one of three roles. The role
decides how much of the workspace state document a user may see and write.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from workspace_sync.db.models.base import UUIDModel, TimestampMixin


class WorkspaceRole(str, Enum):
    """Role enum for workspace role assignments.

    - admin: Sees and writes the full state document
    - manager: Same visibility as admin; reserved for finer policies
    - member: Sees and writes only tasks assigned to their own email
    """

    admin = "admin"
    manager = "manager"
    member = "member"


class WorkspaceRoleAssignmentBase(SQLModel):
    """Fields shared across table and read models."""

    location_id: str = Field(index=True)
    workspace_id: str = Field(index=True)
    # Always stored lowercase
    user_email: str
    role: str = Field(default=WorkspaceRole.member.value, max_length=16)


class WorkspaceRoleAssignment(
    UUIDModel, WorkspaceRoleAssignmentBase, TimestampMixin, table=True
):
    """Role assignment table - one row per user per workspace."""

    __tablename__ = "workspace_roles"
    __table_args__ = (
        UniqueConstraint(
            "location_id",
            "workspace_id",
            "user_email",
            name="uq_workspace_roles_identity",
        ),
    )


class WorkspaceRoleAssignmentRead(WorkspaceRoleAssignmentBase):
    """Schema for returning a role assignment over the API."""

    id: UUID
    created_at: datetime
    updated_at: datetime
