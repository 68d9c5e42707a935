"""Workspace state routes.

Sync workspace state (tasks, filters, ...) to the ``workspace_states`` table:
- GET  /workspace-state?locationId=&workspaceId=&userEmail=
- POST /workspace-state  {locationId, workspaceId, state, userEmail}

The caller's role is resolved on every call; members only ever see and write
their own tasks.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Query

from api.dependencies import RoleStoreDep, StateStoreDep
from api.responses import ERROR_RESPONSES, StateResponse, StateWriteRequest
from workspace_sync.exceptions import ValidationError
from workspace_sync.logging import bind_context
from workspace_sync.policy import resolve_role

router = APIRouter(prefix="/workspace-state", responses=ERROR_RESPONSES)


@router.get("", response_model=StateResponse)
def get_state(
    roles: RoleStoreDep,
    states: StateStoreDep,
    location_id: Annotated[Optional[str], Query(alias="locationId")] = None,
    workspace_id: Annotated[Optional[str], Query(alias="workspaceId")] = None,
    user_email: Annotated[Optional[str], Query(alias="userEmail")] = None,
):
    """Read the workspace state as the caller may see it."""
    if not location_id or not workspace_id:
        raise ValidationError("locationId and workspaceId query params are required")
    bind_context(location_id=location_id, workspace_id=workspace_id, user_email=user_email)

    role = resolve_role(roles, location_id, workspace_id, user_email)
    snapshot = states.get(location_id, workspace_id, role, user_email)
    return StateResponse(role=role, state=snapshot.state, updated_at=snapshot.updated_at)


@router.post("", response_model=StateResponse)
def put_state(
    roles: RoleStoreDep,
    states: StateStoreDep,
    body: Annotated[Optional[StateWriteRequest], Body()] = None,
):
    """Write the workspace state (merged for members) and echo it back."""
    body = body or StateWriteRequest()
    if not body.location_id or not body.workspace_id or body.state is None:
        raise ValidationError("locationId, workspaceId, and state are required in body")
    bind_context(
        location_id=body.location_id,
        workspace_id=body.workspace_id,
        user_email=body.user_email,
    )

    role = resolve_role(roles, body.location_id, body.workspace_id, body.user_email)
    snapshot = states.put(
        body.location_id, body.workspace_id, body.state, role, body.user_email
    )
    return StateResponse(role=role, state=snapshot.state, updated_at=snapshot.updated_at)
