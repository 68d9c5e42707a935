"""Structured logging with structlog.

Provides:
- JSON-formatted log output for production
- Context binding for location_id, workspace_id, user_email
- Factory function for creating loggers
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, WrappedLogger


def add_service_info(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add service information to log entries."""
    event_dict["service"] = "workspace-sync"
    return event_dict


def configure_structlog(
    json_format: bool = True,
    log_level: str = "INFO",
) -> None:
    """Configure structlog for the application.

    Args:
        json_format: If True, output JSON logs (for production).
                     If False, output human-readable logs (for development).
        log_level: The minimum log level to output (DEBUG, INFO, WARNING, ERROR).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Set up stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_service_info,
        structlog.processors.format_exc_info,
    ]

    if json_format:
        renderer = [
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=False)]

    structlog.configure(
        processors=shared_processors + renderer,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger with the given name.

    Example:
        logger = get_logger(__name__)
        logger.info("role_upserted", workspace_id=workspace_id, role=role)
    """
    return structlog.get_logger(name)


def bind_context(
    location_id: Optional[str] = None,
    workspace_id: Optional[str] = None,
    user_email: Optional[str] = None,
) -> None:
    """Bind request context to every log entry emitted in the current context.

    Context is stored in contextvars, so concurrent requests never see each
    other's values.
    """
    values = {
        "location_id": location_id,
        "workspace_id": workspace_id,
        "user_email": user_email.lower() if user_email else None,
    }
    structlog.contextvars.bind_contextvars(
        **{k: v for k, v in values.items() if v}
    )


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


# Initialize with sensible defaults
# Reconfigured by api.main.create_app() from LOG_JSON / LOG_LEVEL
configure_structlog(json_format=False, log_level="INFO")
