"""Assertion primitives and the ``test`` grouping construct.

Assertions never raise on failure. They return ``False``, write one diagnostic
record to the sink and mark the active :class:`~assertkit.context.TestContext`
as failed. ``test`` turns that flag into a single :class:`TestFailure` once its
whole body has run.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from assertkit.context import (
    MISSING,
    FailureRecord,
    TestContext,
    TestResult,
    TestStatus,
    context_scope,
    current_context,
    current_session,
)
from assertkit.errors import TestFailure
from assertkit.serialize import serialize
from assertkit.verbose import get_diagnostic_logger

_log = logging.getLogger(__name__)


def _format_diagnostic(message: str, found: Any, expected: Any) -> str:
    text = f"AssertError: {message}"
    if found is not MISSING:
        text += f"\n\t   Found: {serialize(found)}"
    if expected is not MISSING:
        text += f"\n\tExpected: {serialize(expected)}"
    return text


def _label(message: str | None) -> str:
    return f"[{message}] " if message else ""


def _bound(value: Any) -> str:
    # Text and numbers read bare in bound messages, e.g. "a <= b".
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    return serialize(value)


def assert_(
    compare: Callable[[], Any],
    message: str,
    found: Any = MISSING,
    expected: Any = MISSING,
) -> bool:
    """Evaluate ``compare()`` once and report a failure if it is falsy.

    Args:
        compare: Zero-argument predicate.
        message: Diagnostic text, only used on failure.
        found: Value shown as "Found" in the diagnostic; omitted when not given.
        expected: Value shown as "Expected" in the diagnostic; omitted when not given.

    Returns:
        True if the predicate held, False otherwise.
    """
    ctx = current_context()
    if ctx is not None:
        ctx.assertions += 1

    if compare():
        return True

    record = FailureRecord(
        message=message,
        text=_format_diagnostic(message, found, expected),
        found=found,
        expected=expected,
    )
    sink = ctx.logger if ctx is not None else get_diagnostic_logger()
    sink.info(record.text)

    if ctx is not None:
        ctx.failed = True
        ctx.failures.append(record)
    return False


def equals(test: Any, pass_: Any, message: str | None = None) -> bool:
    """Check that ``test`` and ``pass_`` are structurally equal."""
    rendered_test = serialize(test)
    rendered_pass = serialize(pass_)
    return assert_(
        lambda: rendered_test == rendered_pass,
        f"{_label(message)}{rendered_test} != {rendered_pass}",
        found=test,
        expected=pass_,
    )


def greater_than(test: Any, pass_: Any, message: str | None = None) -> bool:
    """Check that ``test > pass_``. Only the tested value is reported on failure."""
    return assert_(
        lambda: test > pass_,
        f"{_label(message)}{_bound(test)} <= {_bound(pass_)}",
        found=test,
    )


def less_than(test: Any, pass_: Any, message: str | None = None) -> bool:
    """Check that ``test < pass_``. Only the tested value is reported on failure."""
    return assert_(
        lambda: test < pass_,
        f"{_label(message)}{_bound(test)} >= {_bound(pass_)}",
        found=test,
    )


def test(
    body: Callable[[], None],
    test_name: str | None = None,
    *,
    logger: logging.Logger | None = None,
) -> None:
    """Run ``body`` as one test and fail it as a unit.

    Every assertion in ``body`` runs, whether or not an earlier one failed.
    When ``body`` returns and any of them failed, a single :class:`TestFailure`
    is raised. Exceptions raised by ``body`` itself propagate unchanged.

    Args:
        body: Zero-argument callable making the assertions.
        test_name: Label for the test; defaults to "Test".
        logger: Diagnostic sink for this test; defaults to the shared one.

    Raises:
        TestFailure: If any assertion inside ``body`` failed.
    """
    ctx = TestContext(name=test_name or "Test")
    if logger is not None:
        ctx.logger = logger

    _log.debug(f"Starting test '{ctx.name}'")
    start = time.perf_counter()
    try:
        with context_scope(ctx):
            body()
    except BaseException as e:
        _log.debug(f"Test '{ctx.name}' raised {type(e).__name__}: {e}")
        _record(ctx, TestStatus.ERROR, start, error=e)
        raise

    if ctx.failed:
        _log.debug(f"Test '{ctx.name}' failed: {len(ctx.failures)}/{ctx.assertions} assertions failed")
        failure = TestFailure(test_name, ctx)
        _record(ctx, TestStatus.FAILED, start, error=failure)
        raise failure

    _log.debug(f"Test '{ctx.name}' passed: {ctx.assertions} assertions")
    _record(ctx, TestStatus.PASSED, start)


test.__test__ = False  # type: ignore[attr-defined]


def run(
    body: Callable[[], None],
    test_name: str | None = None,
    *,
    logger: logging.Logger | None = None,
) -> bool:
    """Run ``body`` as a test, reporting a failure instead of raising it.

    Lets a batch of tests continue past a failing one. Errors other than
    :class:`TestFailure` still propagate.

    Returns:
        True if the test passed, False if it failed.
    """
    try:
        test(body, test_name, logger=logger)
    except TestFailure as e:
        sink = logger or get_diagnostic_logger()
        label = f" on test {test_name}: " if test_name else ": "
        sink.info(f"{type(e).__name__}{label}{e}")
        return False
    return True


def _record(
    ctx: TestContext,
    status: TestStatus,
    start: float,
    error: BaseException | None = None,
) -> None:
    session = current_session()
    if session is None:
        return
    session.record(
        TestResult(
            name=ctx.name,
            status=status,
            assertions=ctx.assertions,
            failures=list(ctx.failures),
            duration_ms=(time.perf_counter() - start) * 1000,
            error=error,
        )
    )
