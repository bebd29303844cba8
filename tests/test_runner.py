import textwrap

import pytest

from assertkit.config import RunConfig
from assertkit.context import TestStatus
from assertkit.errors import TestFailure
from assertkit.runner import Runner


@pytest.fixture
def write_script(tmp_path):
    def _write(name: str, body: str) -> str:
        path = tmp_path / name
        path.write_text(textwrap.dedent(body))
        return str(path)

    return _write


def test_runner_collects_results_per_script(write_script):
    good = write_script("good.py", """\
        from assertkit import equals, run

        run(lambda: equals(1, 1), "one")
        run(lambda: equals(2, 2), "two")
    """)
    bad = write_script("bad.py", """\
        from assertkit import greater_than, run

        run(lambda: greater_than(1, 2), "ordering")
    """)

    summary = Runner(RunConfig(scripts=[good, bad])).execute()

    assert [s.path for s in summary.scripts] == [good, bad]
    assert summary.scripts[0].all_passed is True
    assert summary.scripts[1].all_passed is False
    assert summary.passed == 2
    assert summary.failed == 1
    assert summary.errors == 0
    assert summary.all_passed is False


def test_uncaught_test_failure_aborts_only_that_script(write_script):
    aborting = write_script("abort.py", """\
        from assertkit import equals, test

        test(lambda: equals("a", "b"), "first")
        test(lambda: equals("a", "a"), "never reached")
    """)
    after = write_script("after.py", """\
        from assertkit import equals, test

        test(lambda: equals(1, 1), "after")
    """)

    summary = Runner(RunConfig(scripts=[aborting, after])).execute()

    first = summary.scripts[0]
    assert isinstance(first.error, TestFailure)
    assert [r.name for r in first.session.results] == ["first"]
    assert first.error_outside_tests is False
    assert summary.scripts[1].all_passed is True
    assert summary.failed == 1
    assert summary.errors == 0


def test_script_error_outside_tests_counts_as_error(write_script):
    broken = write_script("broken.py", "import does_not_exist_anywhere\n")

    summary = Runner(RunConfig(scripts=[broken])).execute()

    assert isinstance(summary.scripts[0].error, ImportError)
    assert summary.scripts[0].error_outside_tests is True
    assert summary.errors == 1


def test_missing_script_recorded(tmp_path):
    summary = Runner(RunConfig(scripts=[str(tmp_path / "nope.py")])).execute()
    assert isinstance(summary.scripts[0].error, FileNotFoundError)
    assert summary.all_passed is False


def test_zero_exit_is_not_an_error(write_script):
    script = write_script("exits.py", """\
        import sys
        from assertkit import equals, run

        run(lambda: equals(1, 1), "before exit")
        sys.exit(0)
    """)
    summary = Runner(RunConfig(scripts=[script])).execute()
    assert summary.all_passed is True


def test_nonzero_exit_is_an_error(write_script):
    script = write_script("exits.py", "import sys\nsys.exit(3)\n")
    summary = Runner(RunConfig(scripts=[script])).execute()
    assert isinstance(summary.scripts[0].error, SystemExit)
    assert summary.errors == 1


def test_exitfirst_stops_after_failing_script(write_script):
    bad = write_script("bad.py", """\
        from assertkit import equals, run

        run(lambda: equals(1, 2), "bad")
    """)
    good = write_script("good.py", """\
        from assertkit import equals, run

        run(lambda: equals(1, 1), "good")
    """)
    summary = Runner(RunConfig(scripts=[bad, good], exitfirst=True)).execute()
    assert len(summary.scripts) == 1


def test_body_error_recorded_as_error_status(write_script):
    script = write_script("raises.py", """\
        from assertkit import test

        def body():
            raise RuntimeError("bug in test code")

        test(body, "buggy")
    """)
    summary = Runner(RunConfig(scripts=[script])).execute()
    result = summary.scripts[0]
    assert result.session.results[0].status is TestStatus.ERROR
    assert result.error_outside_tests is False
    assert summary.errors == 1


def test_diagnostics_redirected_to_stderr(write_script, capsys):
    script = write_script("fails.py", """\
        from assertkit import equals, run

        run(lambda: equals(1, 2), "fails")
    """)
    Runner(RunConfig(scripts=[script], diagnostics="stderr")).execute()
    captured = capsys.readouterr()
    assert "AssertError: 1 != 2" in captured.err
    assert "AssertError" not in captured.out


def test_keyboard_interrupt_returns_partial_results(mocker, write_script):
    first = write_script("first.py", """\
        from assertkit import equals, run

        run(lambda: equals(1, 1), "first")
    """)
    second = write_script("second.py", "")
    runner = Runner(RunConfig(scripts=[first, second]))

    original = runner._run_script

    def interrupt_second(script):
        if script == second:
            raise KeyboardInterrupt
        return original(script)

    mocker.patch.object(runner, "_run_script", side_effect=interrupt_second)
    summary = runner.execute()

    assert runner.interrupted is True
    assert summary.interrupted is True
    assert len(summary.scripts) == 1
    assert summary.all_passed is False
