"""Logging setup for assertion diagnostics and run-level debug output."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Literal, TextIO

DIAGNOSTIC_LOGGER_NAME = "assertkit.diagnostics"

StreamName = Literal["stdout", "stderr"]


class ConsoleHandler(logging.StreamHandler):
    """StreamHandler that looks up sys.stdout/sys.stderr on every emit.

    Binding the stream lazily keeps diagnostics visible to anything that swaps
    the process streams after the handler was created (output capture, CLI
    test runners).
    """

    def __init__(self, stream_name: StreamName = "stdout") -> None:
        super().__init__()
        self.stream_name = stream_name

    @property
    def stream(self) -> TextIO:
        return sys.stderr if self.stream_name == "stderr" else sys.stdout

    @stream.setter
    def stream(self, value: TextIO) -> None:
        if value is sys.stdout:
            self.stream_name = "stdout"
        elif value is sys.stderr:
            self.stream_name = "stderr"
        else:
            raise ValueError(
                "ConsoleHandler only writes to sys.stdout or sys.stderr; "
                "use logging.StreamHandler for other streams"
            )


def get_diagnostic_logger(stream: StreamName | None = None) -> logging.Logger:
    """Return the logger failed assertions are reported to.

    The first call attaches a console handler writing bare messages. Passing
    ``stream`` redirects that handler; ``None`` leaves it as configured.
    """
    logger = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)
    handler = next((h for h in logger.handlers if isinstance(h, ConsoleHandler)), None)
    if handler is None:
        handler = ConsoleHandler(stream or "stdout")
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    elif stream is not None:
        handler.stream_name = stream
    return logger


def setup_logger(
    debug_file: Path | None,
    verbose: bool = False,
    logger_name: str = "assertkit_run",
) -> logging.Logger:
    """
    Configure and return a logger for run-level debug output.

    Writes to debug_file when one is given. Also writes to stderr if verbose=True.

    Args:
        debug_file: Path to debug log file, or None for no file output
        verbose: If True, also log to stderr.
        logger_name: Name of the logger instance (must not already be configured)

    Returns:
        Configured logger instance.

    Raises:
        RuntimeError: If a logger with this name already has handlers attached.
    """
    logger = logging.getLogger(logger_name)

    if logger.handlers:
        raise RuntimeError(
            f"Logger '{logger_name}' already exists with handlers attached; "
            "use a unique logger name per run"
        )

    logger.disabled = False
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S"
    )

    if debug_file is not None:
        debug_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(debug_file, mode='a')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if verbose:
        stderr_handler = ConsoleHandler("stderr")
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def teardown_logger(logger: logging.Logger) -> None:
    """Close and detach every handler so the logger name can be reused."""
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
