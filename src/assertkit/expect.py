"""Value-wrapper front end over the assertion engine."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from assertkit.engine import assert_, equals, greater_than, less_than

T = TypeVar("T")


class Expectation(Generic[T]):
    """Assertions about a single wrapped value.

    Each method reports through the engine and returns its outcome, so a
    failing expectation never stops the enclosing test.
    """

    def __init__(self, value: T) -> None:
        self._value: T = value

    @property
    def value(self) -> T:
        return self._value

    def to_equal(self, other: Any, message: str | None = None) -> bool:
        return equals(self._value, other, message)

    def to_be_greater_than(self, bound: Any, message: str | None = None) -> bool:
        return greater_than(self._value, bound, message)

    def to_be_less_than(self, bound: Any, message: str | None = None) -> bool:
        return less_than(self._value, bound, message)

    def to_satisfy(self, predicate: Callable[[T], Any], message: str) -> bool:
        """Assert ``predicate(value)`` holds, reporting the value when it does not."""
        return assert_(lambda: predicate(self._value), message, found=self._value)


def expect(value: T) -> Expectation[T]:
    """Wrap ``value`` for assertion."""
    return Expectation(value)
