"""FastAPI dependencies shared by the workspace routes."""

from typing import Annotated, Generator

from fastapi import Depends, Request
from sqlmodel import Session

from workspace_sync.db.engine import StoreStatus
from workspace_sync.exceptions import ConfigurationError
from workspace_sync.stores import RoleStore, StateStore


def get_store_status(request: Request) -> StoreStatus:
    """Readiness computed once by create_app()."""
    return getattr(request.app.state, "store", None) or StoreStatus()


def get_session_dependency(
    store: Annotated[StoreStatus, Depends(get_store_status)],
) -> Generator[Session, None, None]:
    """One database session per request.

    Raises:
        ConfigurationError: DATABASE_URL was not set when the app started
    """
    if not store.ready:
        raise ConfigurationError()
    with Session(store.engine) as session:
        yield session


def get_role_store(
    session: Annotated[Session, Depends(get_session_dependency)],
) -> RoleStore:
    return RoleStore(session)


def get_state_store(
    session: Annotated[Session, Depends(get_session_dependency)],
) -> StateStore:
    return StateStore(session)


RoleStoreDep = Annotated[RoleStore, Depends(get_role_store)]
StateStoreDep = Annotated[StateStore, Depends(get_state_store)]
