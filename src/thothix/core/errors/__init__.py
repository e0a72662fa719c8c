"""Error handling module with RFC 7807 Problem Details."""

from thothix.core.errors.exceptions import (
    AppException,
    ForbiddenError,
    UnauthorizedError,
)
from thothix.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
    respond,
    status_for_errors,
)
from thothix.core.outcome import ErrorCode


__all__ = [
    # Exceptions
    "AppException",
    "ErrorCode",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "ProblemDetail",
    "UnauthorizedError",
    "register_exception_handlers",
    "respond",
    "status_for_errors",
]
