"""
Result<T> pattern for gateway outcomes.

Gateway operations never raise to their callers; they return a Result
carrying either the decoded value or the failure message and the
exception that caused it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar('T')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Outcome of an operation that may succeed or fail.

    Attributes:
        status: Result status (SUCCESS or FAILURE)
        value: The decoded value if successful (None if failure)
        error: The exception that caused failure (None if success)
        message: Optional message; for failures, the text shown to the user

    Examples:
        >>> result = await gateway.list_lessons()
        >>> if result.is_success:
        ...     store.replace(result.value)
        ... else:
        ...     error = result.message or "Failed to load lessons"
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the result represents success."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the result represents failure."""
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            value: The result value
            message: Optional success message

        Returns:
            Result instance with SUCCESS status
        """
        return cls(status=ResultStatus.SUCCESS, value=value, message=message)

    @classmethod
    def failure(
        cls,
        message: Optional[str],
        error: Optional[Exception] = None
    ) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            message: Error text from the service, may be empty
            error: Optional exception that caused the failure

        Returns:
            Result instance with FAILURE status
        """
        return cls(status=ResultStatus.FAILURE, message=message, error=error)

    def error_message(self, fallback: str) -> str:
        """
        Get the displayable failure text.

        Args:
            fallback: Generic text describing the failed operation

        Returns:
            The failure message, or ``fallback`` when it is empty
        """
        return self.message or fallback
