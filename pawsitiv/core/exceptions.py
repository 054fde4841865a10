# ==============================================================================
# CUSTOM EXCEPTIONS - Application Error Hierarchy
# ==============================================================================
# Structured exception classes for consistent error handling
# Each exception maps to an HTTP status code
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        status_code: HTTP status code to return
        details: Additional context dictionary

    Example:
        >>> raise AppException(
        ...     message="Something went wrong",
        ...     error_code="INTERNAL_ERROR",
        ...     status_code=500
        ... )
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format for JSON response.

        Returns:
            Dictionary containing error details
        """
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"status_code={self.status_code})"
        )


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    Base exception for database-related errors.

    Attributes:
        cause: Underlying driver exception, when there is one
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=503,
            details=details,
        )
        self.cause = cause


class ConnectionError(DatabaseError):
    """Raised when a single database connection attempt fails."""

    def __init__(
        self,
        message: str = "Failed to connect to database",
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message=message, details=details, cause=cause)
        self.error_code = "DATABASE_CONNECTION_ERROR"


class ConnectionExhaustedError(ConnectionError):
    """
    Raised when every configured connection attempt has failed.

    The last driver error is kept on ``cause`` and is also chained as
    ``__cause__`` by the supervisor.

    Attributes:
        attempts: Number of driver connect calls that were made
    """

    def __init__(
        self,
        attempts: int,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {"attempts": attempts}
        if cause is not None:
            details["last_error"] = str(cause)
        super().__init__(
            message=message or (
                f"Failed to connect to database after multiple attempts "
                f"({attempts})"
            ),
            details=details,
            cause=cause,
        )
        self.error_code = "DATABASE_CONNECTION_EXHAUSTED"
        self.attempts = attempts


class ConnectionClosedError(ConnectionError):
    """Raised to callers waiting on a connect that was cancelled by close()."""

    def __init__(
        self,
        message: str = "Connection attempt cancelled because the connection was closed",
    ) -> None:
        super().__init__(message=message)
        self.error_code = "DATABASE_CONNECTION_CLOSED"


# ==============================================================================
# RESOURCE EXCEPTIONS
# ==============================================================================

class NotFoundError(AppException):
    """
    Raised when a requested resource does not exist.

    Maps to HTTP 404 Not Found.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=details,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AlreadyExistsError(AppException):
    """
    Raised when attempting to create a resource that already exists.

    Maps to HTTP 409 Conflict.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if resource_type:
            _details["resource_type"] = resource_type

        super().__init__(
            message=message,
            error_code="ALREADY_EXISTS",
            status_code=409,
            details=_details,
        )


# ==============================================================================
# VALIDATION EXCEPTIONS
# ==============================================================================

class ValidationError(AppException):
    """Raised when input validation fails (HTTP 422)."""

    def __init__(
        self,
        message: str = "Validation error",
        errors: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=422,
            details={"validation_errors": errors or {}},
        )
        self.errors = errors or {}


class BadRequestError(AppException):
    """Raised for malformed or invalid requests (HTTP 400)."""

    def __init__(
        self,
        message: str = "Bad request",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="BAD_REQUEST",
            status_code=400,
            details=details,
        )


class FileTooLargeError(AppException):
    """Raised when an upload exceeds MAX_UPLOAD_SIZE (HTTP 413)."""

    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            message=f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB",
            error_code="FILE_TOO_LARGE",
            status_code=413,
            details={"max_bytes": max_bytes},
        )


class UnsupportedFileTypeError(AppException):
    """Raised when an upload has an extension outside the allow-list (HTTP 415)."""

    def __init__(self, extension: str, allowed: Optional[list] = None) -> None:
        super().__init__(
            message=f"Unsupported file type: {extension or 'unknown'}",
            error_code="UNSUPPORTED_FILE_TYPE",
            status_code=415,
            details={"allowed": sorted(allowed or [])},
        )


# ==============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# ==============================================================================

class AuthenticationError(AppException):
    """
    Raised when authentication fails.

    Maps to HTTP 401 Unauthorized.

    Common causes:
    - No active session
    - Invalid credentials
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            status_code=401,
            details=details,
        )


class AuthorizationError(AppException):
    """
    Raised when user lacks permission for an action.

    Maps to HTTP 403 Forbidden.
    """

    def __init__(
        self,
        message: str = "Permission denied",
        required_permission: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if required_permission:
            _details["required_permission"] = required_permission

        super().__init__(
            message=message,
            error_code="AUTHORIZATION_ERROR",
            status_code=403,
            details=_details,
        )


# ==============================================================================
# RATE LIMITING EXCEPTIONS
# ==============================================================================

class RateLimitError(AppException):
    """
    Raised when rate limit is exceeded.

    Attributes:
        retry_after: Seconds until the client can retry
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int = 60,
    ) -> None:
        super().__init__(
            message=message,
            error_code="RATE_LIMIT_EXCEEDED",
            status_code=429,
            details={"retry_after_seconds": retry_after},
        )
        self.retry_after = retry_after


class ServiceUnavailableError(AppException):
    """Raised when the database is not reachable (HTTP 503)."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        service_name: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> None:
        details = {}
        if service_name:
            details["service"] = service_name
        if retry_after:
            details["retry_after_seconds"] = retry_after

        super().__init__(
            message=message,
            error_code="SERVICE_UNAVAILABLE",
            status_code=503,
            details=details,
        )
