"""API services module."""

from api.services.health_service import ComponentHealth, DetailedHealth, HealthService

__all__ = [
    "ComponentHealth",
    "DetailedHealth",
    "HealthService",
]
