"""End-to-end tests for ``janusspec run``."""

import re
from pathlib import Path

from janusspec.entrypoints.cli.main import janusspec

# pylint: disable=unused-argument

BASE_ARGS = ["--no-flight-recorder", "--no-color", "run"]


def test_passing_specs_exit_zero(runner, spec_file) -> None:
    result = runner.invoke(janusspec, [*BASE_ARGS, spec_file("self_specs")])
    assert result.exit_code == 0, result.output
    assert "9/9 specs passed" in result.output
    assert "All 9 spec(s) passed." in result.output


def test_failing_specs_exit_one(runner, spec_file) -> None:
    result = runner.invoke(janusspec, [*BASE_ARGS, spec_file("failing_specs")])
    assert result.exit_code == 1
    assert "Expected [1, 2] to equal [1, 2, 3]" in result.output
    assert "ERROR: No assertions were run" in result.output
    assert "1/3 specs passed, 2 failed" in result.output


def test_focus_mode(runner, spec_file) -> None:
    result = runner.invoke(janusspec, [*BASE_ARGS, spec_file("focused_specs")])
    assert result.exit_code == 0, result.output
    assert "would fail" not in result.output
    assert "1/1 specs passed" in result.output


def test_multiple_files_run_in_order(runner, spec_file) -> None:
    result = runner.invoke(
        janusspec,
        [*BASE_ARGS, spec_file("failing_specs"), spec_file("self_specs")],
    )
    assert result.exit_code == 1
    assert result.output.index("asserts nothing") < result.output.index(
        "render() can display objects"
    )
    assert "10/12 specs passed" in result.output


def test_timeout_option(runner, spec_file) -> None:
    result = runner.invoke(
        janusspec, [*BASE_ARGS, "--timeout", "30", spec_file("hanging_specs")]
    )
    assert result.exit_code == 1
    assert "did not finish within allotted time (30 ms)" in result.output


def test_timeout_from_environment(runner, spec_file) -> None:
    result = runner.invoke(
        janusspec,
        [*BASE_ARGS, spec_file("hanging_specs")],
        env={"JANUS_ASYNC_TIMEOUT_MS": "25"},
    )
    assert result.exit_code == 1
    assert "(25 ms)" in result.output


def test_invalid_timeout_is_a_usage_error(runner, spec_file) -> None:
    result = runner.invoke(
        janusspec, [*BASE_ARGS, "--timeout", "0", spec_file("self_specs")]
    )
    assert result.exit_code == 2
    assert re.search(r"Invalid value", result.output)


def test_broken_file_exit_two(runner, spec_file) -> None:
    result = runner.invoke(janusspec, [*BASE_ARGS, spec_file("broken_specs")])
    assert result.exit_code == 2
    assert "Could not load spec file" in result.output
    assert "this spec file is broken" in result.output


def test_missing_file_is_a_usage_error(runner, fs) -> None:
    result = runner.invoke(janusspec, [*BASE_ARGS, "nope.py"])
    assert result.exit_code == 2


def test_timeout_leaves_flight_recorder_log(runner, spec_file, fs) -> None:
    result = runner.invoke(
        janusspec,
        ["--log-path", "run.log", "run", "--timeout", "30", spec_file("hanging_specs")],
    )
    assert result.exit_code == 1
    contents = Path("run.log").read_text(encoding="utf-8")
    assert "[spec=never calls done]" in contents
