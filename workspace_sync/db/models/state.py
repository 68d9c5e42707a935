"""Workspace state documents.

One JSON document per (location, workspace). Only the ``tasks`` list inside
the document is interpreted (by the visibility policy); every other key is
stored and returned untouched.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel
from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from workspace_sync.db.custom_types import JsonDocument
from workspace_sync.db.models.base import utcnow


class WorkspaceState(SQLModel, table=True):
    """State table keyed by (location_id, workspace_id)."""

    __tablename__ = "workspace_states"

    location_id: str = Field(primary_key=True)
    workspace_id: str = Field(primary_key=True)
    state_json: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JsonDocument(), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )


class StateSnapshot(BaseModel):
    """A state document as seen by one caller, plus its last write time.

    Both fields are None when the workspace has never been written.
    """

    state: Optional[dict[str, Any]] = None
    updated_at: Optional[datetime] = None
