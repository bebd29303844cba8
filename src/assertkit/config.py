from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, model_validator


class RunConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    scripts: list[str] = []
    verbose: bool = False
    debug_log: str | None = None
    exitfirst: bool = False
    diagnostics: Literal["stdout", "stderr"] = "stdout"

    @model_validator(mode="after")
    def expand_env_variables(self) -> "RunConfig":
        """Expand ${VAR} references in script and log paths.

        Raises ValueError listing every missing variable so the user can fix them
        all at once rather than hitting them one-by-one mid-run.
        """
        missing: list[str] = []
        expanded: list[str] = []
        for script in self.scripts:
            try:
                expanded.append(expandvars(script, nounset=True))
            except Exception:
                # Variable is missing and has no default
                missing.append(f"  scripts: {script}")
        debug_log = self.debug_log
        if debug_log is not None:
            try:
                debug_log = expandvars(debug_log, nounset=True)
            except Exception:
                missing.append(f"  debug_log: {debug_log}")

        if missing:
            details = "\n".join(missing)
            raise ValueError(f"Config has missing environment variables:\n{details}")

        self.scripts = expanded
        self.debug_log = debug_log
        return self


def load_config(path: Path) -> RunConfig:
    """Load and validate a run config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    config = RunConfig(**raw)

    # Resolve relative paths relative to config file location
    config.scripts = [_resolve(config_dir, s) for s in config.scripts]
    if config.debug_log is not None:
        config.debug_log = _resolve(config_dir, config.debug_log)

    return config


def _resolve(base: Path, value: str) -> str:
    path = Path(value)
    if path.is_absolute():
        return str(path)
    return str((base / path).resolve())
