"""SQLModel table definitions."""

from workspace_sync.db.models.base import UUIDModel, TimestampMixin, utcnow
from workspace_sync.db.models.role import (
    WorkspaceRole,
    WorkspaceRoleAssignment,
    WorkspaceRoleAssignmentRead,
)
from workspace_sync.db.models.state import StateSnapshot, WorkspaceState

__all__ = [
    # Base
    "UUIDModel",
    "TimestampMixin",
    "utcnow",
    # Roles
    "WorkspaceRole",
    "WorkspaceRoleAssignment",
    "WorkspaceRoleAssignmentRead",
    # State
    "WorkspaceState",
    "StateSnapshot",
]
