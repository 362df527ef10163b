"""Success/failure values returned by cache operations.

A :data:`Result` is either :class:`Ok` wrapping a value or :class:`Err`
wrapping a :class:`~flatcache.exceptions.CacheError`.  Both expose the
same small surface so callers can chain work without branching::

    load("results.cache").and_then(lambda c: c.set("a", "1"))

:meth:`Err.unwrap` raises the carried error, which is the bridge back to
ordinary exception handling.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=BaseException)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful result holding :attr:`value`."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, fallback: Any) -> T:
        return self.value

    def unwrap_err(self) -> BaseException:
        raise ValueError(f"Called unwrap_err() on {self!r}")

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        """Apply *fn* to the wrapped value."""
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], "Result[U, Any]"]) -> "Result[U, Any]":
        """Apply *fn*, which itself returns a result, to the wrapped value."""
        return fn(self.value)


@dataclass(frozen=True)
class Err(Generic[E]):
    """A failed result holding the :attr:`error` that caused it."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Raise the carried error."""
        raise self.error

    def unwrap_or(self, fallback: U) -> U:
        return fallback

    def unwrap_err(self) -> E:
        return self.error

    def map(self, fn: Callable[[Any], Any]) -> "Err[E]":
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> "Err[E]":
        return self


Result = Union[Ok[T], Err[E]]
