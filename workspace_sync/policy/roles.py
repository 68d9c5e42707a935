"""Role parsing and caller role resolution.

Resolution is deliberately permissive: callers without an email, emails with
no assignment row, and failed lookups all get a configured default (admin
out of the box). Point DEFAULT_ROLE / ROLE_LOOKUP_FALLBACK_ROLE at "member"
for least-privilege behaviour.
"""

from typing import TYPE_CHECKING, Optional, Union

from workspace_sync import config
from workspace_sync.db.models import WorkspaceRole
from workspace_sync.exceptions import StorageError, ValidationError
from workspace_sync.logging import get_logger

if TYPE_CHECKING:
    from workspace_sync.stores.role_store import RoleStore

logger = get_logger(__name__)


def parse_role(role: Union[str, WorkspaceRole, None]) -> WorkspaceRole:
    """Validate a role value, raising ValidationError("Invalid role")."""
    try:
        return WorkspaceRole(role)
    except ValueError:
        raise ValidationError(
            message="Invalid role",
            details={"allowed": [r.value for r in WorkspaceRole]},
        ) from None


def resolve_role(
    role_store: "RoleStore",
    location_id: str,
    workspace_id: str,
    user_email: Optional[str],
    default_role: Optional[str] = None,
    fallback_role: Optional[str] = None,
) -> WorkspaceRole:
    """Resolve the caller's role for one workspace.

    Args:
        role_store: Store used for the single-row lookup
        location_id: Location (tenant) id
        workspace_id: Workspace id
        user_email: Caller email as supplied; trusted as-is
        default_role: Role for missing email / unassigned users
            (defaults to config.DEFAULT_ROLE)
        fallback_role: Role used when the lookup fails
            (defaults to config.ROLE_LOOKUP_FALLBACK_ROLE)

    Returns:
        The assigned role, or one of the configured defaults. Never raises
        for storage failures.
    """
    default = parse_role(default_role or config.DEFAULT_ROLE)
    if not user_email:
        return default

    try:
        role = role_store.get_role(location_id, workspace_id, user_email)
    except StorageError as e:
        fallback = parse_role(fallback_role or config.ROLE_LOOKUP_FALLBACK_ROLE)
        logger.warning(
            "role_lookup_failed",
            location_id=location_id,
            workspace_id=workspace_id,
            fallback_role=fallback.value,
            error=e.details.get("detail", e.message),
        )
        return fallback

    if role is None:
        return default
    return role
