"""Request and response models for the workspace endpoints.

Wire names are camelCase (``locationId``, ``updatedAt``), matching the
browser client; Python attributes stay snake_case via aliases.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from workspace_sync.db.models import WorkspaceRole, WorkspaceRoleAssignmentRead


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Requests
# =============================================================================


class RoleAssignmentRequest(CamelModel):
    """Body of POST /api/workspace-roles.

    Every field is optional at the schema level so missing fields surface as
    one readable 400 from the store instead of a field-by-field report.
    """

    location_id: Optional[str] = None
    workspace_id: Optional[str] = None
    user_email: Optional[str] = None
    role: Optional[str] = None


class StateWriteRequest(CamelModel):
    """Body of POST /api/workspace-state."""

    location_id: Optional[str] = None
    workspace_id: Optional[str] = None
    user_email: Optional[str] = None
    state: Optional[Any] = None


# =============================================================================
# Responses
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response format.

    Example:
        {"ok": false, "error": "Role not found", "code": "NOT_FOUND"}
    """

    ok: bool = Field(default=False)
    error: str = Field(description="Human-readable error message")
    code: str = Field(description="Machine-readable error code")
    detail: Optional[str] = Field(
        default=None,
        description="Driver diagnostics for storage errors",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"ok": False, "error": "Role not found", "code": "NOT_FOUND"},
                {
                    "ok": False,
                    "error": "DB error (list workspace roles)",
                    "code": "STORAGE_ERROR",
                    "detail": "connection refused",
                },
            ]
        }
    }


class RoleListResponse(BaseModel):
    """GET /api/workspace-roles."""

    ok: bool = True
    roles: list[WorkspaceRoleAssignmentRead]


class RoleUpsertResponse(BaseModel):
    """POST /api/workspace-roles."""

    ok: bool = True
    role: WorkspaceRoleAssignmentRead


class RoleDeleteResponse(BaseModel):
    """DELETE /api/workspace-roles."""

    ok: bool = True
    deleted: bool = True


class StateResponse(CamelModel):
    """GET and POST /api/workspace-state.

    ``state`` and ``updated_at`` are null for a workspace never written.
    """

    ok: bool = True
    role: WorkspaceRole
    state: Optional[dict[str, Any]] = None
    updated_at: Optional[datetime] = None


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing or malformed input"},
    405: {"model": ErrorResponse, "description": "Method not allowed"},
    500: {"model": ErrorResponse, "description": "Store unconfigured or failing"},
}
