"""RFC 7807 Problem Details rendering.

This module turns the three kinds of outcome a request can have into HTTP
responses:

- guard exceptions (``AppException``) and request-binding errors, through
  exception handlers registered on the app;
- business outcomes, through ``respond``, which consumes a ``Response`` with
  a single ``match``.

Unexpected faults are logged with context and returned as an opaque 500;
structured domain errors are returned verbatim.

See: https://tools.ietf.org/html/rfc7807
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from thothix.config import settings
from thothix.core.errors.exceptions import AppException
from thothix.core.outcome import ErrorCode, Response, StructuredError


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


# First error code decides the status of a failed business outcome
STATUS_BY_ERROR_CODE: dict[str, int] = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.PRIVATE_CHANNEL_INVITE_ONLY: status.HTTP_403_FORBIDDEN,
    ErrorCode.PROJECT_ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PROJECT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CHANNEL_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.ALREADY_MEMBER: status.HTTP_409_CONFLICT,
}


class FieldError(BaseModel):
    """Represents a single field validation error."""

    field: str
    message: str
    type: str | None = None


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details response schema.

    Attributes:
        type: URI reference identifying the problem type
        title: Short human-readable summary
        status: HTTP status code
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying this specific occurrence
        errors: Field-level binding errors or structured domain errors
        trace_id: Request trace ID for debugging
    """

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
    errors: list[FieldError | StructuredError] | None = None
    trace_id: str | None = None

    model_config = {"extra": "allow"}


def status_for_errors(errors: tuple[StructuredError, ...]) -> int:
    """HTTP status for a failed business outcome, keyed on the first error."""
    if not errors:
        return status.HTTP_400_BAD_REQUEST
    return STATUS_BY_ERROR_CODE.get(errors[0].code, status.HTTP_400_BAD_REQUEST)


def _get_trace_id(request: Request) -> str | None:
    """Extract trace ID from request state if available."""
    return getattr(request.state, "trace_id", None)


def _get_error_type_uri(error_code: str) -> str:
    """Generate a URI for the error type."""
    return f"{settings.api_docs_base_url}/errors/{error_code.lower()}"


def _title(error_code: str) -> str:
    return error_code.replace("_", " ").title()


def _fault_response(request: Request, fault: Exception) -> JSONResponse:
    logger.error(
        "unexpected_fault",
        path=str(request.url.path),
        error_type=type(fault).__name__,
        exc_info=fault,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ProblemDetail(
            type=_get_error_type_uri(ErrorCode.INTERNAL_ERROR),
            title="Internal Server Error",
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
            instance=str(request.url.path),
            trace_id=_get_trace_id(request),
        ).model_dump(exclude_none=True),
    )


def _failure_response(
    request: Request, errors: tuple[StructuredError, ...]
) -> JSONResponse:
    status_code = status_for_errors(errors)
    first = errors[0]

    logger.warning(
        "domain_failure",
        path=str(request.url.path),
        status_code=status_code,
        codes=[error.code for error in errors],
    )

    return JSONResponse(
        status_code=status_code,
        content=ProblemDetail(
            type=_get_error_type_uri(first.code),
            title=_title(first.code),
            status=status_code,
            detail=first.message or _title(first.code),
            instance=str(request.url.path),
            errors=list(errors),
            trace_id=_get_trace_id(request),
        ).model_dump(exclude_none=True),
    )


def respond(
    response: Response[Any],
    request: Request,
    success_status: int = status.HTTP_200_OK,
    serializer: Callable[[Any], Any] | None = None,
) -> JSONResponse:
    """Consume a business ``Response`` and build the HTTP response.

    Usage:
        @router.get("/{user_id}")
        def get_user(user_id: str, request: Request, service: UserSvc, identity: CurrentIdentity):
            return respond(service.get_user(user_id), request)

    Args:
        response: The outcome produced by a service operation
        request: The incoming request (for logging and the problem instance)
        success_status: Status code used for a ``Valid`` outcome
        serializer: Optional conversion applied to the success value

    Returns:
        A JSON response: 2xx envelope, structured 4xx or opaque 500
    """

    def on_fault(fault: Exception) -> JSONResponse:
        request.state.rollback_only = True
        return _fault_response(request, fault)

    def on_failure(errors: tuple[StructuredError, ...]) -> JSONResponse:
        request.state.rollback_only = True
        return _failure_response(request, errors)

    def on_success(value: Any) -> JSONResponse:
        data = serializer(value) if serializer else value
        return JSONResponse(
            status_code=success_status,
            content={"success": True, "data": jsonable_encoder(data)},
        )

    return response.match(
        on_fault=on_fault,
        on_success=on_success,
        on_failure=on_failure,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions.

    Converts AppException subclasses to RFC 7807 Problem Details responses.
    """
    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=str(request.url.path),
        details=exc.details,
    )

    content: dict[str, Any] = ProblemDetail(
        type=_get_error_type_uri(exc.error_code),
        title=_title(exc.error_code),
        status=exc.status_code,
        detail=exc.message,
        instance=str(request.url.path),
        trace_id=_get_trace_id(request),
    ).model_dump(exclude_none=True)

    # Add any additional details from the exception
    if exc.details:
        for key, value in exc.details.items():
            if key not in content:
                content[key] = value

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request binding errors.

    Converts FastAPI/Pydantic validation errors to RFC 7807 format
    with detailed field-level error information.
    """
    errors: list[FieldError | StructuredError] = []

    for error in exc.errors():
        loc = error.get("loc", ())
        # Skip "body" prefix in field path
        field_parts = [str(part) for part in loc if part != "body"]
        field = ".".join(field_parts) if field_parts else "unknown"

        errors.append(
            FieldError(
                field=field,
                message=error.get("msg", "Invalid value"),
                type=error.get("type"),
            )
        )

    logger.warning(
        "request_validation_error",
        path=str(request.url.path),
        error_count=len(errors),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ProblemDetail(
            type=_get_error_type_uri(ErrorCode.VALIDATION_ERROR),
            title="Validation Error",
            status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Request validation failed",
            instance=str(request.url.path),
            errors=errors,
            trace_id=_get_trace_id(request),
        ).model_dump(exclude_none=True),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle exceptions raised outside a business ``Response``.

    The actual error details are logged but not exposed to clients.
    """
    return _fault_response(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Call this function during app initialization:

        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
