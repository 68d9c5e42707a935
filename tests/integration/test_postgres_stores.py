"""Integration tests for the stores against PostgreSQL.

Each test module run gets its own schema, dropped afterwards.

Run with: DATABASE_URL=postgresql://... pytest -m integration
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import text
from sqlmodel import Session

from workspace_sync.db.models import WorkspaceRole
from workspace_sync.exceptions import NotFoundError
from workspace_sync.stores import RoleStore, StateStore
from tests.db_utils import create_test_engine, drop_test_schema, requires_db

pytestmark = [pytest.mark.integration, requires_db]

LOC = "loc-int"


@pytest.fixture(scope="module")
def test_engine():
    engine, schema_name, database_url = create_test_engine()
    yield engine
    engine.dispose()
    drop_test_schema(database_url, schema_name)


@pytest.fixture
def workspace_id(request):
    """Unique workspace per test so rows never collide."""
    return f"ws-{request.node.name}"


class TestRoleStorePostgres:
    def test_upsert_is_idempotent_and_timezone_aware(self, test_engine, workspace_id):
        with Session(test_engine) as session:
            store = RoleStore(session)
            first = store.upsert(LOC, workspace_id, "Ann@Example.com", "admin")
            second = store.upsert(LOC, workspace_id, "ann@example.com", "member")

            assert second.id == first.id
            assert second.created_at == first.created_at
            assert second.updated_at.tzinfo is not None
            assert store.get_role(LOC, workspace_id, "ANN@example.com") is WorkspaceRole.member
            assert len(store.list(LOC, workspace_id)) == 1

    def test_remove(self, test_engine, workspace_id):
        with Session(test_engine) as session:
            store = RoleStore(session)
            store.upsert(LOC, workspace_id, "ann@example.com", "manager")

            assert store.remove(LOC, workspace_id, "ann@example.com") is True
            with pytest.raises(NotFoundError):
                store.remove(LOC, workspace_id, "ann@example.com")


class TestStateStorePostgres:
    def test_document_stored_as_jsonb(self, test_engine, workspace_id):
        state = {"view": "board", "tasks": [{"id": 1, "assigneeEmail": "ann@example.com"}]}

        with Session(test_engine) as session:
            written = StateStore(session).put(LOC, workspace_id, state, "admin")

            column_type = session.exec(
                text(
                    "SELECT data_type FROM information_schema.columns "
                    "WHERE table_name = 'workspace_states' AND column_name = 'state_json' "
                    "AND table_schema = current_schema()"
                )
            ).scalar_one()

        assert column_type == "jsonb"
        assert written.state == state
        assert written.updated_at.utcoffset() is not None

    def test_concurrent_member_writes_keep_every_task(self, test_engine, workspace_id):
        """Row lock serializes members writing the same existing document."""
        with Session(test_engine) as session:
            StateStore(session).put(LOC, workspace_id, {"tasks": []}, "admin")

        emails = [f"user{i}@example.com" for i in range(6)]

        def write_own_task(email):
            with Session(test_engine) as session:
                StateStore(session).put(
                    LOC,
                    workspace_id,
                    {"tasks": [{"id": email, "assigneeEmail": email}]},
                    "member",
                    email,
                )

        with ThreadPoolExecutor(max_workers=len(emails)) as pool:
            list(pool.map(write_own_task, emails))

        with Session(test_engine) as session:
            snapshot = StateStore(session).get(LOC, workspace_id, "admin")

        assert sorted(t["id"] for t in snapshot.state["tasks"]) == sorted(emails)
