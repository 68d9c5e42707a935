"""Workspace role routes.

Manage workspace-level roles (admin | manager | member):
- GET    /workspace-roles?locationId=&workspaceId=
- POST   /workspace-roles  {locationId, workspaceId, userEmail, role}
- DELETE /workspace-roles?locationId=&workspaceId=&userEmail=
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Query

from api.dependencies import RoleStoreDep
from api.responses import (
    ERROR_RESPONSES,
    ErrorResponse,
    RoleAssignmentRequest,
    RoleDeleteResponse,
    RoleListResponse,
    RoleUpsertResponse,
)
from workspace_sync.db.models import WorkspaceRoleAssignmentRead
from workspace_sync.logging import bind_context

router = APIRouter(prefix="/workspace-roles", responses=ERROR_RESPONSES)


@router.get("", response_model=RoleListResponse)
def list_roles(
    roles: RoleStoreDep,
    location_id: Annotated[Optional[str], Query(alias="locationId")] = None,
    workspace_id: Annotated[Optional[str], Query(alias="workspaceId")] = None,
):
    """List role assignments, sorted by role then email."""
    bind_context(location_id=location_id, workspace_id=workspace_id)
    assignments = roles.list(location_id, workspace_id)
    return RoleListResponse(
        roles=[WorkspaceRoleAssignmentRead.model_validate(a) for a in assignments]
    )


@router.post("", response_model=RoleUpsertResponse)
def upsert_role(
    roles: RoleStoreDep,
    body: Annotated[Optional[RoleAssignmentRequest], Body()] = None,
):
    """Create or update the role of one user in one workspace."""
    body = body or RoleAssignmentRequest()
    bind_context(
        location_id=body.location_id,
        workspace_id=body.workspace_id,
        user_email=body.user_email,
    )
    assignment = roles.upsert(
        body.location_id, body.workspace_id, body.user_email, body.role
    )
    return RoleUpsertResponse(role=WorkspaceRoleAssignmentRead.model_validate(assignment))


@router.delete(
    "",
    response_model=RoleDeleteResponse,
    responses={404: {"model": ErrorResponse, "description": "Role not found"}},
)
def delete_role(
    roles: RoleStoreDep,
    location_id: Annotated[Optional[str], Query(alias="locationId")] = None,
    workspace_id: Annotated[Optional[str], Query(alias="workspaceId")] = None,
    user_email: Annotated[Optional[str], Query(alias="userEmail")] = None,
):
    """Remove a role assignment."""
    bind_context(location_id=location_id, workspace_id=workspace_id, user_email=user_email)
    roles.remove(location_id, workspace_id, user_email)
    return RoleDeleteResponse()
