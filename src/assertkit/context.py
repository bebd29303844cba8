"""Per-test run state and batch sessions.

The state an assertion writes to is held in a :class:`~contextvars.ContextVar`
instead of a module global, so every thread, asyncio task and nested ``test``
call works against its own :class:`TestContext`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from assertkit.verbose import get_diagnostic_logger


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class FailureRecord:
    """A single failed assertion as it was reported to the diagnostic sink."""

    message: str
    text: str
    found: Any = MISSING
    expected: Any = MISSING


@dataclass(slots=True)
class TestContext:
    """Run state for one ``test`` invocation.

    Attributes
    ----------
    name
        Label used in the ``TestFailure`` raised when the test fails.
    failed
        Set by any failing assertion while this context is active.
    assertions
        Number of assertions evaluated while this context was active.
    failures
        Failure records emitted while this context was active.
    logger
        Diagnostic sink that failing assertions write to.
    """

    __test__ = False

    name: str = "Test"
    failed: bool = False
    assertions: int = 0
    failures: list[FailureRecord] = field(default_factory=list)
    logger: logging.Logger = field(default_factory=get_diagnostic_logger)


class TestStatus(str, Enum):
    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


@dataclass
class TestResult:
    """Outcome of one ``test`` call, as recorded into a session."""

    __test__ = False

    name: str
    status: TestStatus
    assertions: int = 0
    failures: list[FailureRecord] = field(default_factory=list)
    duration_ms: float = 0
    error: BaseException | None = None


@dataclass
class Session:
    """Collects the results of every ``test`` call made while it is active."""

    results: list[TestResult] = field(default_factory=list)

    def record(self, result: TestResult) -> None:
        self.results.append(result)

    def _count(self, status: TestStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def passed(self) -> int:
        return self._count(TestStatus.PASSED)

    @property
    def failed(self) -> int:
        return self._count(TestStatus.FAILED)

    @property
    def errors(self) -> int:
        return self._count(TestStatus.ERROR)

    @property
    def all_passed(self) -> bool:
        return all(r.status is TestStatus.PASSED for r in self.results)


TEST_CONTEXT: ContextVar[TestContext | None] = ContextVar("test_context", default=None)
SESSION: ContextVar[Session | None] = ContextVar("session", default=None)


def current_context() -> TestContext | None:
    """Return the context of the innermost running test, if any."""
    return TEST_CONTEXT.get()


def current_session() -> Session | None:
    return SESSION.get()


@contextmanager
def context_scope(ctx: TestContext) -> Iterator[TestContext]:
    token = TEST_CONTEXT.set(ctx)
    try:
        yield ctx
    finally:
        TEST_CONTEXT.reset(token)


@contextmanager
def session_scope(session: Session | None = None) -> Iterator[Session]:
    session = session if session is not None else Session()
    token = SESSION.set(session)
    try:
        yield session
    finally:
        SESSION.reset(token)
