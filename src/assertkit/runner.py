from __future__ import annotations

import logging
import runpy
from dataclasses import dataclass, field
from pathlib import Path

from assertkit.config import RunConfig
from assertkit.context import Session, session_scope
from assertkit.verbose import get_diagnostic_logger


@dataclass
class ScriptResult:
    path: str
    session: Session
    error: BaseException | None = None

    @property
    def all_passed(self) -> bool:
        return self.error is None and self.session.all_passed

    @property
    def error_outside_tests(self) -> bool:
        """True if the script died from an error no recorded test accounts for."""
        if self.error is None:
            return False
        return not any(r.error is self.error for r in self.session.results)


@dataclass
class RunSummary:
    scripts: list[ScriptResult] = field(default_factory=list)
    interrupted: bool = False

    @property
    def passed(self) -> int:
        return sum(s.session.passed for s in self.scripts)

    @property
    def failed(self) -> int:
        return sum(s.session.failed for s in self.scripts)

    @property
    def errors(self) -> int:
        return sum(s.session.errors + int(s.error_outside_tests) for s in self.scripts)

    @property
    def all_passed(self) -> bool:
        return not self.interrupted and all(s.all_passed for s in self.scripts)


class Runner:
    """Runs test scripts one after another, each inside its own session."""

    def __init__(self, config: RunConfig, logger: logging.Logger | None = None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self.interrupted = False

    def execute(self) -> RunSummary:
        """Run every configured script. Returns the collected results."""
        get_diagnostic_logger(self.config.diagnostics)
        summary = RunSummary()
        logger = self.logger
        logger.debug(f"Starting run of {len(self.config.scripts)} script(s)")

        for script in self.config.scripts:
            try:
                result = self._run_script(script)
            except KeyboardInterrupt:
                self.interrupted = True
                summary.interrupted = True
                logger.warning("Run interrupted by user (Ctrl+C). Returning partial results...")
                break

            summary.scripts.append(result)
            session = result.session
            logger.debug(
                f"Script '{script}' finished: {session.passed} passed, "
                f"{session.failed} failed, {session.errors} errors"
            )
            if self.config.exitfirst and not result.all_passed:
                logger.info(f"Stopping after first failing script '{script}'")
                break

        return summary

    def _run_script(self, script: str) -> ScriptResult:
        """Run a single script file as ``__main__``."""
        path = Path(script)
        if not path.is_file():
            self.logger.error(f"Script not found: {script}")
            return ScriptResult(
                path=script,
                session=Session(),
                error=FileNotFoundError(f"script not found: {script}"),
            )

        self.logger.debug(f"Running script '{script}'")
        with session_scope() as session:
            try:
                runpy.run_path(str(path), run_name="__main__")
            except SystemExit as e:
                if e.code:
                    self.logger.error(f"Script '{script}' exited with status {e.code}")
                    return ScriptResult(path=script, session=session, error=e)
            except Exception as e:
                self.logger.error(f"Script '{script}' aborted: {type(e).__name__}: {e}")
                return ScriptResult(path=script, session=session, error=e)

        return ScriptResult(path=script, session=session)
