"""Custom SQLAlchemy types with SQLite-friendly fallbacks."""

from __future__ import annotations

from sqlalchemy import JSON
from sqlalchemy.dialects import postgresql
from sqlalchemy.types import TypeDecorator


class JsonDocument(TypeDecorator):
    """Use Postgres JSONB when available, JSON elsewhere."""

    cache_ok = True
    impl = JSON

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.JSONB())
        return dialect.type_descriptor(JSON())
