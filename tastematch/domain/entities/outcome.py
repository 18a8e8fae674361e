"""
Outcome value object distinguishing success, empty and failed results.

Boundaries that can legitimately find nothing (an unknown product slug)
and can also fail (catalog unreachable) return an Outcome so callers do
not confuse "no data" with "call failed".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from tastematch.utils.exceptions import AppException

T = TypeVar("T")


class OutcomeStatus(Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    FAILURE = "failure"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a boundary call: a value, nothing, or an error."""

    status: OutcomeStatus
    value: Optional[T] = None
    error: Optional[AppException] = None
    reason: str = ""

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(status=OutcomeStatus.SUCCESS, value=value)

    @classmethod
    def empty(cls, reason: str = "") -> "Outcome[T]":
        return cls(status=OutcomeStatus.EMPTY, reason=reason)

    @classmethod
    def failure(cls, error: AppException) -> "Outcome[T]":
        return cls(status=OutcomeStatus.FAILURE, error=error, reason=error.message)

    @property
    def is_success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def is_empty(self) -> bool:
        return self.status == OutcomeStatus.EMPTY

    @property
    def is_failure(self) -> bool:
        return self.status == OutcomeStatus.FAILURE

    def unwrap(self) -> T:
        """
        Return the value of a successful outcome.

        Raises:
            AppException: The wrapped error for a failed outcome.
            LookupError: For an empty outcome.
        """
        if self.is_failure:
            raise self.error
        if self.is_empty:
            raise LookupError(self.reason or "Outcome is empty")
        return self.value
