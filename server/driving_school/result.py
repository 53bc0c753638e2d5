"""
Result<T> pattern for store operations.

Store lookups report a missing record as a value instead of raising, and the
routers turn that value into an HTTP status.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class ResultStatus(str, Enum):
    """Outcome of a store operation."""
    OK = "ok"
    NOT_FOUND = "not_found"


@dataclass
class Result(Generic[T]):
    """
    Unified result wrapper for operations that may not find their record.

    Attributes:
        status: OK or NOT_FOUND
        value: The record if the operation succeeded
        message: Human readable reason for a failure

    Examples:
        >>> result = store.lessons.delete(3)
        >>> if result.is_ok:
        ...     print(result.value.id)
    """

    status: ResultStatus
    value: Optional[T] = None
    message: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.status == ResultStatus.OK

    @property
    def is_not_found(self) -> bool:
        return self.status == ResultStatus.NOT_FOUND

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def not_found(cls, message: str = "Not found") -> "Result[T]":
        return cls(status=ResultStatus.NOT_FOUND, message=message)

    def unwrap(self) -> T:
        """
        Unwrap the result value.

        Raises:
            ValueError: If the result is not OK
        """
        if not self.is_ok:
            raise ValueError(f"Cannot unwrap {self.status.value} result: {self.message}")
        return self.value
