"""Store for per-workspace state documents (``workspace_states``).

Reads are post-processed and writes pre-merged through the visibility
policy, so a member never reads or overwrites another user's tasks.
"""

from collections.abc import Mapping
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from workspace_sync.db.engine import upsert_statement
from workspace_sync.db.models import StateSnapshot, WorkspaceRole, WorkspaceState, utcnow
from workspace_sync.exceptions import StorageError, ValidationError
from workspace_sync.logging import get_logger
from workspace_sync.policy.roles import parse_role
from workspace_sync.policy.visibility import merge_state_for_member, scope_state_for_member

logger = get_logger(__name__)


class StateStore:
    """Read and write the single state document of a workspace."""

    def __init__(self, session: Session):
        self.session = session

    def get(
        self,
        location_id: str,
        workspace_id: str,
        caller_role: str,
        caller_email: Optional[str] = None,
    ) -> StateSnapshot:
        """Return the document as the caller may see it.

        A workspace that was never written yields an empty snapshot, not an
        error.
        """
        _require_ids(location_id, workspace_id)
        caller_role = parse_role(caller_role)
        try:
            row = self._select(location_id, workspace_id)
        except SQLAlchemyError as e:
            self._fail("read workspace state", e)

        if row is None:
            return StateSnapshot()

        state_json, updated_at = row
        return StateSnapshot(
            state=self._visible(state_json or {}, caller_role, caller_email),
            updated_at=updated_at,
        )

    def put(
        self,
        location_id: str,
        workspace_id: str,
        incoming_state: Any,
        caller_role: str,
        caller_email: Optional[str] = None,
    ) -> StateSnapshot:
        """Write the document and return it as the caller may see it.

        Non-members replace the whole document. Members have their write
        merged into the stored document first (see merge_state_for_member).
        """
        if not location_id or not workspace_id or incoming_state is None:
            raise ValidationError("locationId, workspaceId, and state are required in body")
        if not isinstance(incoming_state, Mapping):
            raise ValidationError("state must be a JSON object")
        caller_role = parse_role(caller_role)

        try:
            if caller_role is WorkspaceRole.member:
                # Row lock (PostgreSQL) holds off other writers until commit
                row = self._select(location_id, workspace_id, for_update=True)
                existing_state = (row[0] or {}) if row is not None else {}
                state_to_store = merge_state_for_member(
                    existing_state, incoming_state, caller_email
                )
            else:
                state_to_store = dict(incoming_state)

            table = WorkspaceState.__table__
            insert = upsert_statement(self.session, table).values(
                location_id=location_id,
                workspace_id=workspace_id,
                state_json=state_to_store,
                updated_at=utcnow(),
            )
            statement = insert.on_conflict_do_update(
                index_elements=[table.c.location_id, table.c.workspace_id],
                set_={
                    "state_json": insert.excluded.state_json,
                    "updated_at": insert.excluded.updated_at,
                },
            ).returning(table.c.state_json, table.c.updated_at)

            stored_state, updated_at = self.session.exec(statement).one()
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("write workspace state", e)

        tasks = stored_state.get("tasks")
        logger.info(
            "workspace_state_written",
            location_id=location_id,
            workspace_id=workspace_id,
            role=caller_role.value,
            task_count=len(tasks) if isinstance(tasks, list) else None,
        )
        return StateSnapshot(
            state=self._visible(stored_state, caller_role, caller_email),
            updated_at=updated_at,
        )

    def _select(self, location_id: str, workspace_id: str, for_update: bool = False):
        statement = (
            select(WorkspaceState.state_json, WorkspaceState.updated_at)
            .where(
                WorkspaceState.location_id == location_id,
                WorkspaceState.workspace_id == workspace_id,
            )
            .limit(1)
        )
        if for_update:
            statement = statement.with_for_update()
        return self.session.exec(statement).first()

    @staticmethod
    def _visible(
        state: Mapping[str, Any], caller_role: WorkspaceRole, caller_email: Optional[str]
    ) -> dict[str, Any]:
        if caller_role is WorkspaceRole.member:
            return scope_state_for_member(state, caller_email)
        return dict(state)

    def _fail(self, operation: str, exc: SQLAlchemyError):
        self.session.rollback()
        logger.error("workspace_states_db_error", operation=operation, error=str(exc))
        raise StorageError.from_exception(f"DB error ({operation})", exc) from exc


def _require_ids(location_id: Optional[str], workspace_id: Optional[str]) -> None:
    if not location_id or not workspace_id:
        raise ValidationError("locationId and workspaceId are required")
