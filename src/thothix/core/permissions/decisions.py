"""Access decisions and join outcomes."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from thothix.core.outcome import ErrorCode, StructuredError


class DenialReason(StrEnum):
    """Why an authorization check denied access."""

    NOT_AUTHENTICATED = "not_authenticated"
    ROLE_INSUFFICIENT = "role_insufficient"
    NOT_MEMBER = "not_member"
    RESOURCE_NOT_FOUND = "resource_not_found"
    LOOKUP_FAILED = "lookup_failed"


_ERROR_CODE_BY_REASON: dict[DenialReason, ErrorCode] = {
    DenialReason.NOT_AUTHENTICATED: ErrorCode.UNAUTHORIZED,
    DenialReason.RESOURCE_NOT_FOUND: ErrorCode.NOT_FOUND,
}

_MESSAGE_BY_REASON: dict[DenialReason, str] = {
    DenialReason.NOT_AUTHENTICATED: "Authentication required",
    DenialReason.ROLE_INSUFFICIENT: "Insufficient permissions",
    DenialReason.NOT_MEMBER: "Access restricted to members",
    DenialReason.RESOURCE_NOT_FOUND: "Resource not found",
    DenialReason.LOOKUP_FAILED: "Unable to resolve caller role",
}


@dataclass(frozen=True, slots=True)
class AccessDecision:
    """Allow, or Deny with a reason. Truthy iff allowed."""

    allowed: bool
    reason: DenialReason | None = None

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenialReason) -> "AccessDecision":
        return cls(allowed=False, reason=reason)

    def __bool__(self) -> bool:
        return self.allowed

    def to_error(self, message: str | None = None, **details: Any) -> StructuredError:
        """Structured error describing this denial.

        Args:
            message: Overrides the default message for the reason
            **details: Extra context, e.g. the permission or resource id

        Raises:
            ValueError: If called on an allowing decision
        """
        if self.reason is None:
            raise ValueError("An allowing decision has no error")
        code = _ERROR_CODE_BY_REASON.get(self.reason, ErrorCode.FORBIDDEN)
        return StructuredError.create(
            code,
            message or _MESSAGE_BY_REASON[self.reason],
            reason=str(self.reason),
            **details,
        )


@dataclass(frozen=True, slots=True)
class JoinOutcome:
    """Result of a channel join attempt."""

    allowed: bool
    code: ErrorCode | None = None
    message: str = ""

    @classmethod
    def joined(cls) -> "JoinOutcome":
        return cls(allowed=True, message="Joined channel")

    @classmethod
    def denied(cls, code: ErrorCode, message: str) -> "JoinOutcome":
        return cls(allowed=False, code=code, message=message)

    def __bool__(self) -> bool:
        return self.allowed

    def to_error(self, **details: Any) -> StructuredError:
        """Structured error describing a denied join."""
        if self.code is None:
            raise ValueError("A successful join has no error")
        return StructuredError.create(self.code, self.message, **details)
