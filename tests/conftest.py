"""Pytest configuration and fixtures."""

import logging

import pytest

from assertkit.context import TestContext, context_scope
from assertkit.verbose import get_diagnostic_logger


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up assertkit run loggers after each test to prevent name collisions."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("assertkit_")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]

    # Runs may redirect diagnostics to stderr; put them back.
    get_diagnostic_logger("stdout")


@pytest.fixture
def ctx():
    """An active test context for assertions made outside engine.test()."""
    context = TestContext(name="fixture")
    with context_scope(context):
        yield context
