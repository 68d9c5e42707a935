"""Database-backed stores for roles and workspace state."""

from workspace_sync.stores.role_store import RoleStore
from workspace_sync.stores.state_store import StateStore

__all__ = [
    "RoleStore",
    "StateStore",
]
