"""
Result envelope for expected, recoverable failures.

``Ok[T]`` wraps a value, ``Err[T]`` wraps the exception that prevented one.
The scalar execution path uses it to keep conversion failures out of the
exception flow until the boundary decides what to return.

Examples:
    >>> from dal.result import Ok, Err, try_result
    >>> try_result(lambda: int("42")).unwrap()
    42
    >>> try_result(lambda: int("x")).unwrap_or(0)
    0
    >>> match Ok(5):
    ...     case Ok(value):
    ...         print(value)
    5

Tags:
    result, error-handling, dal

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value."""
        return Ok(f(self.value))

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, "value": self.value}

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """Failed result containing the error."""

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the error. Use only when you're sure it's Ok."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        """Get default since this is Err."""
        return default

    def unwrap_or_else(self, f: Callable[[Exception], T]) -> T:
        """Call f with error to get value."""
        return f(self.error)

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err."""
        return Err(self.error)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": False,
            "error": str(self.error),
            "error_type": type(self.error).__name__,
        }

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[T]]


def try_result(
    f: Callable[[], T],
    errors: tuple[type[Exception], ...] = (Exception,),
) -> Result[T]:
    """
    Call ``f`` and wrap its outcome.

    Only exceptions matching ``errors`` become ``Err``; anything else
    propagates.
    """
    try:
        return Ok(f())
    except errors as e:
        return Err(e)


__all__ = [
    "Ok",
    "Err",
    "Result",
    "try_result",
]
