"""Tests for health check routes and service."""

from datetime import datetime
from unittest.mock import MagicMock, patch

from sqlalchemy.exc import OperationalError

from api.services.health_service import ComponentHealth, DetailedHealth, HealthService
from workspace_sync.db.engine import StoreStatus


class TestHealthService:
    """Tests for HealthService."""

    def test_health_service_custom_version(self, engine):
        service = HealthService(StoreStatus(engine=engine, reachable=True), version="2.0.0")
        assert service.version == "2.0.0"

    def test_check_database_success(self, engine):
        service = HealthService(StoreStatus(engine=engine, reachable=True))

        assert service.check_database() is True

    def test_check_database_not_configured(self):
        service = HealthService(StoreStatus())

        assert service.check_database() is False

    def test_check_database_failure(self):
        """check_database returns False when the query fails."""
        service = HealthService(StoreStatus(engine=MagicMock()))

        with patch(
            "api.services.health_service.Session",
            side_effect=OperationalError("SELECT 1", {}, Exception("refused")),
        ):
            assert service.check_database() is False

    def test_get_detailed_health_healthy(self, engine):
        service = HealthService(StoreStatus(engine=engine, reachable=True), version="1.2.3")

        result = service.get_detailed_health()

        assert isinstance(result, DetailedHealth)
        assert result.status == "healthy"
        assert result.version == "1.2.3"
        assert [c.name for c in result.components] == ["database"]
        assert result.components[0].status == "healthy"
        assert result.components[0].latency_ms is not None

    def test_get_detailed_health_unhealthy(self, engine):
        service = HealthService(StoreStatus(engine=engine))

        with patch.object(service, "check_database", return_value=False):
            result = service.get_detailed_health()

        assert result.status == "unhealthy"
        assert result.components[0].message == "Database connection failed"

    def test_get_detailed_health_not_configured(self):
        service = HealthService(StoreStatus(error="DATABASE_URL is not configured on the server"))

        result = service.get_detailed_health()

        assert result.status == "unhealthy"
        assert result.components[0].latency_ms is None
        assert result.components[0].message == "DATABASE_URL is not configured on the server"

    def test_get_detailed_health_includes_timestamp(self):
        result = HealthService(StoreStatus()).get_detailed_health()

        # Should be parseable as ISO format
        assert datetime.fromisoformat(result.timestamp).tzinfo is not None


class TestComponentHealth:
    def test_component_health_with_error(self):
        component = ComponentHealth(
            name="database",
            status="unhealthy",
            message="Connection refused",
        )

        assert component.latency_ms is None
        assert component.message == "Connection refused"


class TestHealthRoutes:
    def test_liveness(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_ready(self, client):
        response = client.get("/api/health/ready")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "configured": True, "database": True}

    def test_ready_not_configured(self, make_client):
        from api.main import create_app

        client = make_client(create_app(database_url=""))

        response = client.get("/api/health/ready")

        assert response.status_code == 503
        body = response.json()
        assert body["ok"] is False
        assert body["code"] == "SERVICE_UNAVAILABLE"
        assert "DATABASE_URL" in body["error"]

    def test_liveness_when_not_configured(self, make_client):
        from api.main import create_app

        client = make_client(create_app(database_url=""))

        assert client.get("/api/health").status_code == 200

    def test_detailed(self, client):
        response = client.get("/api/health/detailed")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"][0]["name"] == "database"
