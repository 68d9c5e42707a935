"""Global exception handlers for FastAPI.

Every error leaves the service as the same JSON envelope:

    {"ok": false, "error": "<message>", "code": "<CODE>", "detail": "..."}

``detail`` is only present when there is diagnostic text to add (storage
errors). Unhandled exceptions are logged but never exposed to clients.
"""

import logging
import traceback
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from workspace_sync.exceptions import MethodNotSupportedError, WorkspaceSyncException

logger = logging.getLogger(__name__)


def create_error_response(
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Create standardized error response structure.

    Args:
        code: Machine-readable error code
        message: Human-readable error message
        details: Optional extra keys merged into the envelope

    Returns:
        Error response dictionary
    """
    error = {
        "ok": False,
        "error": message,
        "code": code,
    }
    if details:
        error.update(details)
    return error


async def workspace_sync_exception_handler(
    request: Request, exc: WorkspaceSyncException
) -> JSONResponse:
    """Handle WorkspaceSyncException and subclasses."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "API error: %s (code=%s, status=%d, path=%s)",
        exc.message,
        exc.error_code,
        exc.status_code,
        request.url.path,
        extra={"details": exc.details},
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request parsing/validation errors as 400s.

    A body that is not valid JSON is reported as "Invalid JSON body"; any
    other failure lists the offending fields.
    """
    errors = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error.get("loc", []))
        errors.append(
            {
                "field": loc,
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "value_error"),
            }
        )

    logger.info(
        "Validation error: %d field errors (path=%s)",
        len(errors),
        request.url.path,
    )

    if any(e["type"] == "json_invalid" for e in errors):
        message = "Invalid JSON body"
    else:
        message = "Request validation failed"

    return JSONResponse(
        status_code=400,
        content=create_error_response(
            code="VALIDATION_ERROR",
            message=message,
            details={"errors": errors},
        ),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle Starlette/FastAPI HTTPExceptions.

    Routing raises these for unknown paths (404) and unsupported methods
    (405); 405s are re-raised through MethodNotSupportedError so they share
    its message and code.
    """
    if exc.status_code == 405:
        response = await workspace_sync_exception_handler(
            request, MethodNotSupportedError()
        )
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    status_code_map = {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        409: "CONFLICT",
        422: "UNPROCESSABLE_ENTITY",
        500: "INTERNAL_ERROR",
        503: "SERVICE_UNAVAILABLE",
    }

    error_code = status_code_map.get(exc.status_code, "ERROR")
    message = str(exc.detail) if exc.detail else "An error occurred"

    if exc.status_code >= 500:
        logger.error(
            "HTTP error %d: %s (path=%s)",
            exc.status_code,
            message,
            request.url.path,
        )
    else:
        logger.info(
            "HTTP error %d: %s (path=%s)",
            exc.status_code,
            message,
            request.url.path,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(code=error_code, message=message),
        headers=exc.headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Logs the full traceback but returns a generic message to clients.
    """
    logger.error(
        "Unhandled exception: %s (path=%s)\n%s",
        str(exc),
        request.url.path,
        traceback.format_exc(),
    )

    return JSONResponse(
        status_code=500,
        content=create_error_response(
            code="INTERNAL_ERROR",
            message="An unexpected error occurred",
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers with the FastAPI app."""
    app.add_exception_handler(WorkspaceSyncException, workspace_sync_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
