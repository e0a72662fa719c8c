"""Machine-readable error codes carried by structured domain errors."""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Codes returned to API clients in ``StructuredError.code``."""

    # Generic
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # Users
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Projects and channels
    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    CHANNEL_NOT_FOUND = "CHANNEL_NOT_FOUND"
    ALREADY_MEMBER = "ALREADY_MEMBER"
    PRIVATE_CHANNEL_INVITE_ONLY = "PRIVATE_CHANNEL_INVITE_ONLY"
    PROJECT_ACCESS_DENIED = "PROJECT_ACCESS_DENIED"

    # Authorization
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
