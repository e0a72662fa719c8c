"""Lazy, memoized three-way outcome of a business operation.

A ``Response`` wraps a producer returning a ``Validation`` without calling
it. The first ``match`` runs the producer under ``try_`` and caches the
result; later calls reuse the cache. The memo write is guarded by a lock, so
concurrent first calls still run the producer once and all observe the same
result.

Usage:
    response = Response(lambda: Valid(user))
    response.match(
        on_fault=lambda exc: ...,       # unexpected fault, 5xx
        on_success=lambda user: ...,    # 2xx
        on_failure=lambda errors: ...,  # structured 4xx
    )
"""

import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from thothix.core.outcome.exceptional import Exceptional, try_
from thothix.core.outcome.validation import Invalid, StructuredError, Valid, Validation


T = TypeVar("T")
R = TypeVar("R")


class Response(Generic[T]):
    """Deferred computation producing a ``Validation[T]``."""

    __slots__ = ("_lock", "_producer", "_result")

    def __init__(self, producer: Callable[[], Validation[T]]) -> None:
        self._producer = producer
        self._result: Exceptional[Validation[T]] | None = None
        self._lock = threading.Lock()

    @classmethod
    def success(cls, value: T) -> "Response[T]":
        """Response that succeeds with an already-known value."""
        return cls(lambda: Valid(value))

    @classmethod
    def failure(cls, *errors: StructuredError) -> "Response[Any]":
        """Response that fails with already-known errors."""
        invalid = Invalid(*errors)
        return cls(lambda: invalid)

    @property
    def evaluated(self) -> bool:
        """Whether the producer has already run."""
        return self._result is not None

    def _produce(self) -> Validation[T]:
        validation = self._producer()
        if not isinstance(validation, Valid | Invalid):
            raise TypeError(
                f"Response producer must return Valid or Invalid, got {type(validation).__name__}"
            )
        return validation

    def _evaluate(self) -> Exceptional[Validation[T]]:
        result = self._result
        if result is None:
            with self._lock:
                if self._result is None:
                    self._result = try_(self._produce)
                result = self._result
        return result

    def match(
        self,
        on_fault: Callable[[Exception], R],
        on_success: Callable[[T], R],
        on_failure: Callable[[tuple[StructuredError, ...]], R],
    ) -> R:
        """Dispatch to exactly one branch.

        Args:
            on_fault: Called with the exception if the producer raised
            on_success: Called with the value of a ``Valid`` result
            on_failure: Called with the errors of an ``Invalid`` result

        Returns:
            Whatever the selected branch returns
        """
        return self._evaluate().match(
            on_fault,
            lambda validation: validation.match(on_failure, on_success),
        )
