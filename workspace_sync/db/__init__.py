"""Database infrastructure for SQLModel + PostgreSQL.

Usage:
    from workspace_sync.db import create_db_engine, check_store

    status = check_store(create_db_engine())
    if status.ready:
        with Session(status.engine) as session:
            ...
"""

from workspace_sync.db.engine import (
    StoreStatus,
    check_store,
    create_db_engine,
    init_db,
    upsert_statement,
)

__all__ = [
    "StoreStatus",
    "check_store",
    "create_db_engine",
    "init_db",
    "upsert_statement",
]
