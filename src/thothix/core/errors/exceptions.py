"""Exceptions raised by route-level guards.

Business operations never raise these: they return ``Invalid`` through a
``Response``. The guards that run before a handler (authentication and
minimum-role checks) raise them instead, and the registered exception
handlers convert them to RFC 7807 Problem Details responses.
"""

from typing import Any

from thothix.core.outcome.codes import ErrorCode


class AppException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class UnauthorizedError(AppException):
    """Raised when no caller identity accompanies the request.

    Example:
        raise UnauthorizedError("Missing identity header")
    """

    message = "Authentication required"
    error_code = ErrorCode.UNAUTHORIZED
    status_code = 401


class ForbiddenError(AppException):
    """Raised when the caller lacks the role or permission a route requires.

    Example:
        raise ForbiddenError(
            "Insufficient role privileges",
            details={"required_role": "admin"}
        )
    """

    message = "Access forbidden"
    error_code = ErrorCode.FORBIDDEN
    status_code = 403
