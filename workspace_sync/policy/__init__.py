"""Role resolution and member visibility rules."""

from workspace_sync.policy.roles import parse_role, resolve_role
from workspace_sync.policy.visibility import (
    filter_for_member,
    is_assigned_to,
    merge_for_member,
    merge_state_for_member,
    normalize_email,
    scope_state_for_member,
)

__all__ = [
    "parse_role",
    "resolve_role",
    "filter_for_member",
    "is_assigned_to",
    "merge_for_member",
    "merge_state_for_member",
    "normalize_email",
    "scope_state_for_member",
]
