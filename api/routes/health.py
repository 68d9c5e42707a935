"""Health check API routes.

Provides endpoints for:
- GET /health - Basic liveness check
- GET /health/ready - Readiness check (configuration + DB connectivity)
- GET /health/detailed - Detailed health with component status
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_store_status
from api.services.health_service import DetailedHealth, HealthService
from workspace_sync import __version__
from workspace_sync.db.engine import StoreStatus

router = APIRouter(prefix="/health", tags=["health"])


def get_health_service(
    store: Annotated[StoreStatus, Depends(get_store_status)],
) -> HealthService:
    return HealthService(store, version=__version__)


@router.get("")
def health() -> dict:
    """Basic liveness check.

    Returns 200 if the process is serving requests.

    Returns:
        dict: {"status": "ok"}
    """
    return {"status": "ok"}


@router.get("/ready")
def ready(
    health_service: Annotated[HealthService, Depends(get_health_service)],
) -> dict:
    """Readiness check.

    Returns:
        dict: {"status": "ok", "configured": true, "database": true}

    Raises:
        HTTPException 503: Store unconfigured or unreachable
    """
    if not health_service.store.ready:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready: DATABASE_URL is not configured",
        )

    db_healthy = health_service.check_database()
    if not db_healthy:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready: database unavailable",
        )

    return {
        "status": "ok",
        "configured": True,
        "database": db_healthy,
    }


@router.get("/detailed", response_model=DetailedHealth)
def detailed(
    health_service: Annotated[HealthService, Depends(get_health_service)],
) -> DetailedHealth:
    """Detailed health check with component status and latency."""
    return health_service.get_detailed_health()
