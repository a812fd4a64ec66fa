# -*- coding: utf-8 -*-
"""
src/textsnip/core/result.py

Result pattern implementation for error handling.

A `Result` holds either a success value or a `TextSnipError`. Pipeline steps
return one instead of raising, so a failure travels back to the orchestrator
as data and is converted to a user-facing notice there.
"""

from typing import Generic, Optional, TypeVar

from .errors import TextSnipError

T = TypeVar('T')


class Result(Generic[T]):
    """
    Result type for representing success or failure of an operation.

    Attributes:
        value: The result value (if successful)
        error: Error object (if failed)
        is_success: Whether the operation was successful
        is_failure: Whether the operation failed
    """

    __slots__ = ("_value", "_error")

    def __init__(self, value: Optional[T], error: Optional[TextSnipError]):
        self._value = value
        self._error = error

    @classmethod
    def ok(cls, value: T) -> 'Result[T]':
        """Create a successful result with a value."""
        return cls(value, None)

    @classmethod
    def fail(cls, error: TextSnipError) -> 'Result[T]':
        """Create a failed result with an error."""
        if error is None:
            raise ValueError("A failed result needs an error")
        return cls(None, error)

    @property
    def is_success(self) -> bool:
        """Whether the result represents a successful operation."""
        return self._error is None

    @property
    def is_failure(self) -> bool:
        """Whether the result represents a failed operation."""
        return not self.is_success

    @property
    def value(self) -> T:
        """
        Get the success value.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(f"Cannot access value of a failed result: {self._error}")
        return self._value

    @property
    def error(self) -> TextSnipError:
        """
        Get the error.

        Raises:
            ValueError: If the result is a success
        """
        if self.is_success:
            raise ValueError("Cannot access error of a successful result")
        return self._error

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.ok({self._value!r})"
        return f"Result.fail({type(self._error).__name__}({self._error.message!r}))"
