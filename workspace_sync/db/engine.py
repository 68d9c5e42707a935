"""SQLModel engine creation and store readiness.

This module provides:
- Engine creation from the configured DATABASE_URL (TLS for PostgreSQL)
- A one-shot startup check producing a StoreStatus readiness flag
- Dialect-aware ``INSERT ... ON CONFLICT`` construction for upserts
- Table initialization for development/testing
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import Table, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from workspace_sync.config import DATABASE_SSLMODE, DATABASE_URL
from workspace_sync.exceptions import ConfigurationError
from workspace_sync.logging import get_logger

logger = get_logger(__name__)


@dataclass
class StoreStatus:
    """Result of the startup configuration check.

    ``ready`` is consulted by every store-backed request. ``reachable`` only
    feeds the readiness probe: a database that was down at startup may come
    back, so requests still try it.
    """

    engine: Optional[Engine] = None
    reachable: bool = False
    error: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.engine is not None


def create_db_engine(
    database_url: Optional[str] = None,
    sslmode: str = DATABASE_SSLMODE,
) -> Optional[Engine]:
    """Create an engine for ``database_url``, or None when it is unset."""
    database_url = DATABASE_URL if database_url is None else database_url
    if not database_url:
        logger.error(
            "database_url_missing",
            hint="Set DATABASE_URL in the service environment",
        )
        return None

    url = make_url(database_url)
    kwargs: dict = {"echo": False, "pool_pre_ping": True}
    backend = url.get_backend_name()
    if backend == "postgresql":
        kwargs["connect_args"] = {"sslmode": sslmode}
    elif backend == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # One shared connection, otherwise each checkout sees an empty db
            kwargs["poolclass"] = StaticPool
            kwargs.pop("pool_pre_ping")
    return create_engine(url, **kwargs)


def check_store(engine: Optional[Engine]) -> StoreStatus:
    """Probe the engine once with ``SELECT 1``."""
    if engine is None:
        return StoreStatus(error=ConfigurationError().message)
    try:
        with Session(engine) as session:
            session.exec(text("SELECT 1")).fetchone()
    except SQLAlchemyError as e:
        logger.warning("database_unreachable", error=str(e))
        return StoreStatus(engine=engine, reachable=False, error=str(e))
    return StoreStatus(engine=engine, reachable=True)


def init_db(engine: Engine) -> None:
    """Create the workspace_roles and workspace_states tables if missing.

    Should only be used for development/testing. Production schemas are
    managed outside this service.
    """
    # Import models so they are registered with SQLModel metadata
    from workspace_sync.db.models import (  # noqa: F401
        WorkspaceRoleAssignment,
        WorkspaceState,
    )

    SQLModel.metadata.create_all(engine)


def upsert_statement(session: Session, table: Table):
    """Return a dialect-specific INSERT supporting ``on_conflict_do_update``."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(table)
    if dialect == "sqlite":
        return sqlite.insert(table)
    raise ConfigurationError(
        message=f"Unsupported database dialect: {dialect}",
        details={"detail": "workspace-sync requires PostgreSQL or SQLite"},
    )
