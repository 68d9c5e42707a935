"""FastAPI backend for workspace state and role sync."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.error_handlers import register_error_handlers
from api.routes import health, workspace_roles, workspace_state
from workspace_sync import __version__, config
from workspace_sync.db.engine import check_store, create_db_engine, init_db
from workspace_sync.logging import configure_structlog

logger = logging.getLogger(__name__)


def create_app(
    database_url: Optional[str] = None,
    auto_create_tables: Optional[bool] = None,
) -> FastAPI:
    """Build the application and run the one-time store check.

    Args:
        database_url: Overrides config.DATABASE_URL ("" means unconfigured)
        auto_create_tables: Overrides config.AUTO_CREATE_TABLES

    The resulting StoreStatus lives on ``app.state.store``; every
    store-backed request consults it instead of touching the engine blindly.
    """
    configure_structlog(json_format=config.LOG_JSON, log_level=config.LOG_LEVEL)

    app = FastAPI(
        title="Workspace Sync API",
        description="Per-workspace state documents and role assignments",
        version=__version__,
    )

    engine = create_db_engine(database_url)
    store = check_store(engine)
    if auto_create_tables is None:
        auto_create_tables = config.AUTO_CREATE_TABLES
    if store.reachable and auto_create_tables:
        init_db(engine)
    app.state.store = store
    logger.info(
        "Store status: configured=%s reachable=%s", store.ready, store.reachable
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.get_cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register global error handlers
    register_error_handlers(app)

    app.include_router(workspace_roles.router, prefix="/api", tags=["workspace-roles"])
    app.include_router(workspace_state.router, prefix="/api", tags=["workspace-state"])
    app.include_router(health.router, prefix="/api", tags=["health"])

    return app


app = create_app()
