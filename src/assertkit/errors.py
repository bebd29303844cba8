"""Exceptions raised by the assertion engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from assertkit.context import TestContext


class TestFailure(AssertionError):
    """Raised when a ``test`` block finishes after one of its assertions failed.

    Attributes:
        test_name: Label of the failed test ("Test" when none was given).
        context: Run state of the failed test, including its failure records.
    """

    __test__ = False

    def __init__(self, test_name: str | None = None, context: TestContext | None = None):
        self.test_name = test_name or "Test"
        self.context = context
        super().__init__(f"{self.test_name} Failed")
