"""assertkit - assertions that report instead of raising, grouped into tests."""

from assertkit.context import (
    FailureRecord,
    Session,
    TestContext,
    TestResult,
    TestStatus,
    context_scope,
    current_context,
    session_scope,
)
from assertkit.engine import assert_, equals, greater_than, less_than, run, test
from assertkit.errors import TestFailure
from assertkit.expect import Expectation, expect
from assertkit.serialize import serialize

__all__ = [
    # Assertions
    "assert_",
    "equals",
    "greater_than",
    "less_than",
    "expect",
    "Expectation",
    # Tests
    "test",
    "run",
    "TestFailure",
    # Run state
    "TestContext",
    "FailureRecord",
    "context_scope",
    "current_context",
    "Session",
    "TestResult",
    "TestStatus",
    "session_scope",
    # Rendering
    "serialize",
]
