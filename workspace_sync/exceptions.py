"""Standard exception classes for the workspace sync service.

All custom exceptions inherit from WorkspaceSyncException and include:
- message: Human-readable error message
- error_code: Machine-readable error code (e.g., "NOT_FOUND")
- details: Optional dictionary with additional context
"""

from typing import Any, Optional


class WorkspaceSyncException(Exception):
    """Base exception for all workspace sync errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for client handling
        details: Optional dictionary with additional error context
        status_code: HTTP status code (set by subclasses)
    """

    status_code: int = 500
    default_error_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the JSON error envelope."""
        result: dict[str, Any] = {
            "ok": False,
            "error": self.message,
            "code": self.error_code,
        }
        if self.details:
            result.update(self.details)
        return result


class ConfigurationError(WorkspaceSyncException):
    """Store is unconfigured or unreachable (HTTP 500)."""

    status_code = 500
    default_error_code = "NOT_CONFIGURED"

    def __init__(
        self,
        message: str = "DATABASE_URL is not configured on the server",
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class ValidationError(WorkspaceSyncException):
    """Request validation failed (HTTP 400).

    Use when request data is missing or malformed.
    """

    status_code = 400
    default_error_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str = "Validation failed",
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class NotFoundError(WorkspaceSyncException):
    """Resource not found (HTTP 404).

    Use when the target of a delete does not exist.
    """

    status_code = 404
    default_error_code = "NOT_FOUND"

    def __init__(
        self,
        message: str = "Resource not found",
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class StorageError(WorkspaceSyncException):
    """Backend failure while talking to the database (HTTP 500).

    The driver message is kept under details["detail"] for diagnostics.
    """

    status_code = 500
    default_error_code = "STORAGE_ERROR"

    def __init__(
        self,
        message: str = "DB error",
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)

    @classmethod
    def from_exception(cls, message: str, exc: BaseException) -> "StorageError":
        """Wrap a driver/ORM exception, keeping its text as detail."""
        return cls(message=message, details={"detail": str(exc) or type(exc).__name__})


class MethodNotSupportedError(WorkspaceSyncException):
    """HTTP method not supported by the endpoint (HTTP 405)."""

    status_code = 405
    default_error_code = "METHOD_NOT_ALLOWED"

    def __init__(
        self,
        message: str = "Method not allowed",
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)
