"""Validation results for domain logic.

A ``Validation`` is either ``Valid(value)`` or ``Invalid(*errors)``. Expected
domain rejections (bad input, missing resources, conflicts, authorization
denials) are always reported as ``Invalid`` and never raised.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


T = TypeVar("T")
R = TypeVar("R")


class StructuredError(BaseModel):
    """A domain rejection that is safe to return to the caller verbatim.

    Attributes:
        code: Machine-readable error code (e.g. "USER_NOT_FOUND")
        message: Human-readable explanation
        details: Additional context for clients
    """

    model_config = ConfigDict(frozen=True)

    code: str
    message: str = ""
    details: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def create(cls, code: str, message: str = "", **details: Any) -> "StructuredError":
        """Build an error with keyword details.

        Example:
            StructuredError.create("USER_NOT_FOUND", "User not found", user_id=user_id)
        """
        return cls(code=str(code), message=message, details=details)

    def __str__(self) -> str:
        if self.message:
            return f"{self.code}: {self.message}"
        return self.code


@dataclass(frozen=True, slots=True)
class Valid(Generic[T]):
    """Successful validation carrying the produced value."""

    value: T

    @property
    def is_valid(self) -> bool:
        return True

    def match(
        self,
        on_invalid: Callable[[tuple[StructuredError, ...]], R],
        on_valid: Callable[[T], R],
    ) -> R:
        return on_valid(self.value)


@dataclass(frozen=True, slots=True, init=False)
class Invalid:
    """Failed validation carrying one or more structured errors."""

    errors: tuple[StructuredError, ...]

    def __init__(self, *errors: StructuredError) -> None:
        if not errors:
            raise ValueError("Invalid requires at least one error")
        object.__setattr__(self, "errors", tuple(errors))

    @property
    def is_valid(self) -> bool:
        return False

    def match(
        self,
        on_invalid: Callable[[tuple[StructuredError, ...]], R],
        on_valid: Callable[[Any], R],
    ) -> R:
        return on_invalid(self.errors)


Validation = Valid[T] | Invalid
