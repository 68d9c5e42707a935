"""Centralized configuration for the workspace sync service."""

import os

# =============================================================================
# PostgreSQL Database
# =============================================================================

# PostgreSQL connection URL (Neon, RDS, local...).
# There is deliberately no default: an unset DATABASE_URL leaves the store
# unconfigured and every store-backed request answers 500.
DATABASE_URL = os.environ.get("DATABASE_URL", "").strip()

# TLS mode passed to the PostgreSQL driver. Ignored for other dialects.
DATABASE_SSLMODE = os.environ.get("DATABASE_SSLMODE", "require")

# Create missing tables at startup (dev/test). Production schemas are managed
# outside this service.
AUTO_CREATE_TABLES = os.environ.get("AUTO_CREATE_TABLES", "true").lower() == "true"

# =============================================================================
# Role policy
# =============================================================================

# Role given to callers without an email and to emails with no assignment row.
# "admin" keeps unassigned users unrestricted; set to "member" for least privilege.
DEFAULT_ROLE = os.environ.get("DEFAULT_ROLE", "admin").lower()

# Role used when the role lookup itself fails (storage error).
ROLE_LOOKUP_FALLBACK_ROLE = os.environ.get("ROLE_LOOKUP_FALLBACK_ROLE", "admin").lower()

# =============================================================================
# HTTP / logging
# =============================================================================

CORS_ORIGINS = os.environ.get(
    "CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# JSON logs for production, console renderer for development
LOG_JSON = os.environ.get("LOG_JSON", "false").lower() == "true"


def get_cors_origins_list(origins: str = CORS_ORIGINS) -> list[str]:
    """Split a comma-separated origin list, dropping blanks."""
    return [o.strip() for o in origins.split(",") if o.strip()]
