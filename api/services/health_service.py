"""Health check service for component status monitoring.

Provides methods to check the health of the service's only collaborator,
the relational store:
- Configuration status (was DATABASE_URL set at startup)
- Database connectivity
- Detailed health status
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from workspace_sync.db.engine import StoreStatus

logger = logging.getLogger(__name__)


class ComponentHealth(BaseModel):
    """Health status for a single component."""
    name: str
    status: str  # "healthy", "unhealthy"
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class DetailedHealth(BaseModel):
    """Detailed health status with all component statuses."""
    status: str  # "healthy", "unhealthy"
    timestamp: str
    version: str
    components: list[ComponentHealth]


class HealthService:
    """Service for checking system component health."""

    def __init__(self, store: StoreStatus, version: str = "1.0.0"):
        self.store = store
        self.version = version

    def check_database(self) -> bool:
        """Check database connectivity.

        Returns:
            True if database is accessible, False otherwise.
        """
        if not self.store.ready:
            logger.warning("Database engine not initialized")
            return False

        try:
            with Session(self.store.engine) as session:
                session.exec(text("SELECT 1")).fetchone()
                return True
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def get_detailed_health(self) -> DetailedHealth:
        """Get detailed health status of all components."""
        db_start = datetime.now()
        db_healthy = self.check_database()
        db_latency = (datetime.now() - db_start).total_seconds() * 1000

        if not self.store.ready:
            message = self.store.error or "Database is not configured"
        elif not db_healthy:
            message = "Database connection failed"
        else:
            message = None

        components = [
            ComponentHealth(
                name="database",
                status="healthy" if db_healthy else "unhealthy",
                latency_ms=round(db_latency, 2) if self.store.ready else None,
                message=message,
            )
        ]

        overall_status = "healthy" if db_healthy else "unhealthy"

        return DetailedHealth(
            status=overall_status,
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=self.version,
            components=components,
        )
