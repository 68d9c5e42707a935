"""Test database helpers.

Unit tests run on in-memory SQLite. Integration tests need a PostgreSQL
DATABASE_URL and run inside a throwaway schema.
"""

import os
import uuid

import pytest
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, create_engine

from workspace_sync.db.engine import create_db_engine, init_db


def _database_url() -> str:
    """Resolve the database URL for integration tests."""
    return os.environ.get("DATABASE_URL", "")


def is_database_available() -> bool:
    """Check if a PostgreSQL database is available for tests."""
    database_url = _database_url()
    if not database_url or make_url(database_url).get_backend_name() != "postgresql":
        return False
    try:
        engine = create_engine(database_url, pool_pre_ping=True)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        engine.dispose()
        return True
    except Exception:
        return False


# Pytest marker to skip tests when database is not available
requires_db = pytest.mark.skipif(
    not is_database_available(),
    reason="PostgreSQL not available (set DATABASE_URL)"
)


def create_sqlite_engine():
    """Create an in-memory SQLite engine with all tables."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return engine


def create_test_engine():
    """Create a PostgreSQL engine bound to a unique schema.

    Raises OperationalError if database is not available.
    """
    database_url = _database_url()
    schema_name = f"test_{uuid.uuid4().hex}"

    admin_engine = create_engine(database_url, pool_pre_ping=True)
    with admin_engine.begin() as conn:
        conn.execute(text(f'CREATE SCHEMA "{schema_name}"'))
    admin_engine.dispose()

    test_engine = create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args={"options": f"-csearch_path={schema_name}"},
    )
    SQLModel.metadata.create_all(test_engine)
    return test_engine, schema_name, database_url


def drop_test_schema(database_url: str, schema_name: str) -> None:
    """Drop a test schema and all dependent objects."""
    admin_engine = create_engine(database_url, pool_pre_ping=True)
    with admin_engine.begin() as conn:
        conn.execute(text(f'DROP SCHEMA IF EXISTS "{schema_name}" CASCADE'))
    admin_engine.dispose()
