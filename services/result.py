"""
Result type for service return values.

Services report expected failures (bad input, missing fixture, version
conflict) as a failed Result rather than raising, so the command layer can
turn them into user-facing messages.

Usage:
    return Result.ok(balance_result)
    return Result.fail("Fixture 7 not found", code=FIXTURE_NOT_FOUND)

    result = balance_service.balance_by_performance(fixture_id)
    if result:
        lineup = result.value
    elif result.retryable:
        ...  # reload the fixture version and try again
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from services.error_codes import RETRYABLE_CODES

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service call.

    Attributes:
        success: Whether the operation succeeded
        value: Payload on success (None for void operations)
        error: Human readable error on failure
        error_code: One of services.error_codes on failure
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    @property
    def retryable(self) -> bool:
        """True for failures caused by a concurrent writer."""
        return not self.success and self.error_code in RETRYABLE_CODES

    def unwrap(self) -> T:
        """
        Get the value.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore

    def unwrap_or(self, default: T) -> T:
        return self.value if self.success else default  # type: ignore

    def map(self, fn: Callable[[T], "Result"]) -> "Result":
        """Apply fn to the value of a successful result; pass failures through."""
        if not self.success:
            return self
        return fn(self.value)
