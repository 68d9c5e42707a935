"""Store for workspace role assignments (``workspace_roles``).

Every operation is a single statement; the database's atomic
``INSERT ... ON CONFLICT`` provides the only coordination needed.
"""

from typing import Optional
from uuid import uuid4

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from workspace_sync.db.engine import upsert_statement
from workspace_sync.db.models import WorkspaceRole, WorkspaceRoleAssignment, utcnow
from workspace_sync.exceptions import NotFoundError, StorageError, ValidationError
from workspace_sync.logging import get_logger
from workspace_sync.policy.roles import parse_role
from workspace_sync.policy.visibility import normalize_email

logger = get_logger(__name__)


class RoleStore:
    """CRUD over (location, workspace, user email) -> role."""

    def __init__(self, session: Session):
        self.session = session

    def list(self, location_id: str, workspace_id: str) -> list[WorkspaceRoleAssignment]:
        """List assignments for a workspace, sorted by role then email."""
        if not location_id or not workspace_id:
            raise ValidationError("locationId and workspaceId are required")

        statement = (
            select(WorkspaceRoleAssignment)
            .where(
                WorkspaceRoleAssignment.location_id == location_id,
                WorkspaceRoleAssignment.workspace_id == workspace_id,
            )
            .order_by(WorkspaceRoleAssignment.role, WorkspaceRoleAssignment.user_email)
        )
        try:
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            self._fail("list workspace roles", e)

    def get_role(
        self, location_id: str, workspace_id: str, user_email: str
    ) -> Optional[WorkspaceRole]:
        """Look up a single user's role, or None when unassigned.

        Raises:
            StorageError: the query failed, or the stored value is not a
                known role (the column carries no constraint)
        """
        statement = (
            select(WorkspaceRoleAssignment.role)
            .where(
                WorkspaceRoleAssignment.location_id == location_id,
                WorkspaceRoleAssignment.workspace_id == workspace_id,
                WorkspaceRoleAssignment.user_email == normalize_email(user_email),
            )
            .limit(1)
        )
        try:
            role = self.session.exec(statement).first()
        except SQLAlchemyError as e:
            self._fail("look up workspace role", e)
        if role is None:
            return None

        try:
            return WorkspaceRole(role)
        except ValueError:
            logger.error(
                "workspace_role_invalid",
                location_id=location_id,
                workspace_id=workspace_id,
                user_email=normalize_email(user_email),
                role=role,
            )
            raise StorageError(
                message="DB error (look up workspace role)",
                details={"detail": f"Unknown role value stored: {role!r}"},
            ) from None

    def upsert(
        self, location_id: str, workspace_id: str, user_email: str, role: str
    ) -> WorkspaceRoleAssignment:
        """Insert or update the role for one user in one workspace.

        Existing rows keep their id and created_at; role and updated_at are
        replaced.
        """
        if not location_id or not workspace_id or not user_email or not role:
            raise ValidationError(
                "locationId, workspaceId, userEmail, and role are required"
            )
        role = parse_role(role)

        table = WorkspaceRoleAssignment.__table__
        now = utcnow()
        insert = upsert_statement(self.session, table).values(
            id=uuid4(),
            location_id=location_id,
            workspace_id=workspace_id,
            user_email=normalize_email(user_email),
            role=role.value,
            created_at=now,
            updated_at=now,
        )
        statement = insert.on_conflict_do_update(
            index_elements=[table.c.location_id, table.c.workspace_id, table.c.user_email],
            set_={"role": insert.excluded.role, "updated_at": insert.excluded.updated_at},
        ).returning(*table.c)

        try:
            row = self.session.exec(statement).mappings().one()
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("upsert workspace role", e)

        logger.info(
            "workspace_role_upserted",
            location_id=location_id,
            workspace_id=workspace_id,
            user_email=row["user_email"],
            role=row["role"],
        )
        return WorkspaceRoleAssignment(**row)

    def remove(self, location_id: str, workspace_id: str, user_email: str) -> bool:
        """Delete one assignment. Raises NotFoundError when nothing matched."""
        if not location_id or not workspace_id or not user_email:
            raise ValidationError(
                "locationId, workspaceId, and userEmail are required"
            )

        table = WorkspaceRoleAssignment.__table__
        statement = (
            delete(table)
            .where(
                table.c.location_id == location_id,
                table.c.workspace_id == workspace_id,
                table.c.user_email == normalize_email(user_email),
            )
            .returning(table.c.id)
        )
        try:
            deleted = self.session.exec(statement).all()
            self.session.commit()
        except SQLAlchemyError as e:
            self._fail("delete workspace role", e)

        if not deleted:
            raise NotFoundError("Role not found")

        logger.info(
            "workspace_role_removed",
            location_id=location_id,
            workspace_id=workspace_id,
            user_email=normalize_email(user_email),
        )
        return True

    def _fail(self, operation: str, exc: SQLAlchemyError):
        self.session.rollback()
        logger.error("workspace_roles_db_error", operation=operation, error=str(exc))
        raise StorageError.from_exception(f"DB error ({operation})", exc) from exc
