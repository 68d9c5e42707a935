"""Shared fixtures for testing."""

import asyncio
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlmodel import Session, SQLModel

from workspace_sync.db.models import WorkspaceRoleAssignment, WorkspaceState  # noqa: F401
from workspace_sync.stores import RoleStore, StateStore

from tests.db_utils import create_sqlite_engine


class SyncTestClient:
    """Synchronous wrapper around httpx AsyncClient for testing."""

    def __init__(self, app):
        self.app = app
        self.transport = ASGITransport(app=app)
        self.base_url = "http://testserver"

    def _run_async(self, coro):
        """Run async coroutine synchronously."""
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(coro)
        finally:
            loop.close()

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        """Make async request."""
        async with AsyncClient(transport=self.transport, base_url=self.base_url) as client:
            return await client.request(method, url, **kwargs)

    def request(self, method: str, url: str, **kwargs):
        return self._run_async(self._request(method, url, **kwargs))

    def get(self, url: str, **kwargs):
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs):
        return self.request("POST", url, **kwargs)

    def delete(self, url: str, **kwargs):
        return self.request("DELETE", url, **kwargs)


@pytest.fixture
def engine():
    """In-memory SQLite engine with the workspace tables."""
    engine = create_sqlite_engine()
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create a test session."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def role_store(session):
    return RoleStore(session)


@pytest.fixture
def state_store(session):
    return StateStore(session)


@pytest.fixture
def app():
    """Application wired to its own in-memory SQLite store."""
    from api.main import create_app

    app = create_app(database_url="sqlite://", auto_create_tables=True)
    yield app
    app.state.store.engine.dispose()


@pytest.fixture
def client(app):
    return SyncTestClient(app)


@pytest.fixture
def make_client():
    """Client factory for tests that build their own app."""
    return SyncTestClient


@pytest.fixture
def app_engine(app):
    """Engine behind the ``app`` fixture, for seeding and inspection."""
    return app.state.store.engine
