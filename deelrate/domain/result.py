"""
Result and Error types.

Every domain and application operation returns a Result instead of
raising for expected failures. The error kind decides how a caller
(e.g. the HTTP layer) reports the failure.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from deelrate.domain.exceptions import ResultAccessError

T = TypeVar("T")


class ErrorType(Enum):
    """Error taxonomy."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    FAILURE = "failure"


@dataclass(frozen=True)
class Error:
    """
    Immutable description of a failed operation.

    Attributes:
        code: Dotted error code (e.g. "ExchangeOrder.NotInitiated")
        description: Human readable message
        error_type: Error kind
    """
    code: str
    description: str
    error_type: ErrorType

    # --- Factory Methods ---

    @classmethod
    def validation(cls, code: str, description: str) -> Error:
        """Bad input or illegal state transition."""
        return cls(code, description, ErrorType.VALIDATION)

    @classmethod
    def conflict(cls, code: str, description: str) -> Error:
        """A constructed value violates a domain rule."""
        return cls(code, description, ErrorType.CONFLICT)

    @classmethod
    def not_found(cls, code: str, description: str) -> Error:
        """Missing order or missing upstream data."""
        return cls(code, description, ErrorType.NOT_FOUND)

    @classmethod
    def failure(cls, code: str, description: str) -> Error:
        """Unexpected or transport-level fault."""
        return cls(code, description, ErrorType.FAILURE)

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success-or-error outcome.

    Attributes:
        is_success: Whether the operation succeeded
        error: Error when the operation failed
    """
    is_success: bool
    _value: Optional[T] = None
    error: Optional[Error] = None

    def __post_init__(self) -> None:
        if self.is_success and self.error is not None:
            raise ValueError("Successful result cannot carry an error")
        if not self.is_success and self.error is None:
            raise ValueError("Failed result must carry an error")

    @classmethod
    def success(cls, value: Optional[T] = None) -> Result[T]:
        """Create a successful result."""
        return cls(is_success=True, _value=value)

    @classmethod
    def failure(cls, error: Error) -> Result[T]:
        """Create a failed result."""
        return cls(is_success=False, error=error)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def value(self) -> T:
        """Value of a successful result."""
        if not self.is_success:
            raise ResultAccessError(
                f"Cannot read the value of a failed result ({self.error})"
            )
        return self._value
