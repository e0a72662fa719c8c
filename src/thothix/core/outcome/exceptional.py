"""Fault capture.

``try_`` is the single boundary where a raised exception is turned into
data. Only ``Exception`` subclasses are captured; ``KeyboardInterrupt`` and
``SystemExit`` keep propagating.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar


T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Computation finished normally."""

    value: T

    @property
    def is_fault(self) -> bool:
        return False

    def match(
        self,
        on_fault: Callable[[Exception], R],
        on_ok: Callable[[T], R],
    ) -> R:
        return on_ok(self.value)


@dataclass(frozen=True, slots=True)
class Err:
    """Computation raised an unexpected fault."""

    fault: Exception

    @property
    def is_fault(self) -> bool:
        return True

    def match(
        self,
        on_fault: Callable[[Exception], R],
        on_ok: Callable[[Any], R],
    ) -> R:
        return on_fault(self.fault)


Exceptional = Ok[T] | Err


def try_(producer: Callable[[], T]) -> Exceptional[T]:
    """Run ``producer`` and capture any raised exception as ``Err``.

    Args:
        producer: Zero-argument callable to execute

    Returns:
        ``Ok(value)`` on normal return, ``Err(fault)`` otherwise
    """
    try:
        value = producer()
    except Exception as exc:
        return Err(exc)
    return Ok(value)
