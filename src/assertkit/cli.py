from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="assertkit", help="Run assertion-based test scripts")

DEFAULT_CONFIG = "assertkit.yaml"


@app.command()
def run(
    scripts: list[str] | None = typer.Argument(None, help="Test scripts to run"),
    config: str | None = typer.Option(
        None, "--config", "-c", help=f"Path to run YAML config (default: ./{DEFAULT_CONFIG} if present)"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(None, help="Write run debug log to this file"),
    exitfirst: bool = typer.Option(
        False, "--exitfirst", "-x", help="Stop after the first failing script"
    ),
    diagnostics: str | None = typer.Option(
        None, help="Stream for assertion diagnostics: stdout or stderr"
    ),
):
    """Run test scripts and report how their tests fared."""
    import yaml

    from assertkit.config import RunConfig, load_config
    from assertkit.runner import Runner
    from assertkit.verbose import setup_logger, teardown_logger

    try:
        if config is not None:
            config_path = Path(config)
            if not config_path.exists():
                typer.echo(f"Error: config file not found: {config}", err=True)
                raise typer.Exit(1)
            run_config = load_config(config_path)
        elif Path(DEFAULT_CONFIG).exists():
            run_config = load_config(Path(DEFAULT_CONFIG))
        else:
            run_config = RunConfig()

        overrides = {
            "scripts": scripts or None,
            "verbose": verbose or None,
            "debug_log": debug_log,
            "exitfirst": exitfirst or None,
            "diagnostics": diagnostics,
        }
        merged = run_config.model_dump()
        merged.update({k: v for k, v in overrides.items() if v is not None})
        run_config = RunConfig(**merged)
    except (ValueError, yaml.YAMLError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not run_config.scripts:
        typer.echo("Error: no test scripts given", err=True)
        raise typer.Exit(1)

    logger = setup_logger(
        Path(run_config.debug_log) if run_config.debug_log else None,
        verbose=run_config.verbose,
        logger_name="assertkit_run",
    )
    try:
        summary = Runner(config=run_config, logger=logger).execute()
    finally:
        teardown_logger(logger)

    for result in summary.scripts:
        session = result.session
        status = "PASS" if result.all_passed else "FAIL"
        line = f"  {status}  {result.path} ({session.passed}/{len(session.results)} tests passed)"
        if result.error is not None and result.error_outside_tests:
            line += f": {type(result.error).__name__}: {result.error}"
        typer.echo(line)

    if summary.interrupted:
        typer.echo("Run interrupted. Results are partial.")

    typer.echo(f"{summary.passed} passed, {summary.failed} failed, {summary.errors} errors")

    if not summary.all_passed:
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(
        ".", "--dir", help="Directory to initialize the test project in"
    ),
):
    """Initialize a project with an example config and test script."""
    project_dir = Path(dir)

    if not project_dir.exists():
        project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / DEFAULT_CONFIG
    if example.exists():
        typer.echo(f"{DEFAULT_CONFIG} already exists in {dir}, skipping.")
        return

    example.write_text("""\
scripts:
  - tests/example_checks.py
verbose: false
exitfirst: false
diagnostics: stdout
""")

    checks = project_dir / "tests" / "example_checks.py"
    checks.parent.mkdir(parents=True, exist_ok=True)
    if not checks.exists():
        checks.write_text('''\
from assertkit import equals, greater_than, less_than, run


def arithmetic():
    equals(1 + 1, 2, "addition")
    greater_than(3, 2, "ordering")
    less_than("a", "b", "text ordering")


run(arithmetic, "arithmetic")
''')

    typer.echo(f"Initialized test project in {dir}:")
    typer.echo(f"  {DEFAULT_CONFIG}             - example run config")
    typer.echo("  tests/example_checks.py    - example test script")
