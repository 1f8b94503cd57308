"""Unit tests for reporter implementations."""

from __future__ import annotations

import click
import pytest

from janusspec.adapters.reporters import ConsoleReporter, RecordingReporter, glyphs
from janusspec.domain.outcome import Diagnostic

# pylint: disable=redefined-outer-name


class FakeAsciiStream:
    """Minimal stream that reports ASCII encoding."""

    encoding = "ascii"


@pytest.fixture
def console() -> ConsoleReporter:
    return ConsoleReporter(color=False)


def test_description_and_pass(console, capsys) -> None:
    console.log_description("adds numbers")
    console.log_result([Diagnostic(True, "Expected 1 to be 1")])
    out = capsys.readouterr().out
    assert "adds numbers" in out
    assert "Passed!" in out
    assert "Expected 1 to be 1" not in out


def test_failures_are_listed(console, capsys) -> None:
    console.log_result(
        [Diagnostic(True, "fine"), Diagnostic(False, "Expected 1 to be 2")]
    )
    out = capsys.readouterr().out
    assert "Failed." in out
    assert "      Expected 1 to be 2" in out
    assert "fine" not in out


def test_no_assertions(console, capsys) -> None:
    console.log_result([])
    assert "ERROR: No assertions were run" in capsys.readouterr().out


def test_errors_go_to_stderr(console, capsys) -> None:
    console.log_error("Spec 'x' raised ValueError: boom")
    captured = capsys.readouterr()
    assert "Spec 'x' raised ValueError: boom" in captured.err
    assert captured.out == ""


@pytest.mark.parametrize(
    ("passed", "total", "expected"),
    [(2, 2, "2/2 specs passed"), (1, 3, "1/3 specs passed, 2 failed")],
)
def test_summary(console, capsys, passed, total, expected) -> None:
    console.log_summary(passed, total)
    assert expected in capsys.readouterr().out


def test_ascii_fallback_glyphs(monkeypatch) -> None:
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeAsciiStream())
    assert glyphs.pass_glyph() == "+"
    assert glyphs.fail_glyph() == "x"
    assert glyphs.caution_glyph() == "[!]"


def test_console_reporter_colors_through_click(console, monkeypatch) -> None:
    """The console reporter renders through click.secho."""
    calls = []
    monkeypatch.setattr(click, "secho", lambda *a, **k: calls.append((a, k)))
    console.log_result([Diagnostic(True)])
    assert calls[0][1]["fg"] == "green"


def test_recording_reporter_keeps_order() -> None:
    reporter = RecordingReporter()
    reporter.log_description("a")
    reporter.log_result([Diagnostic(True)])
    reporter.log_error("oops")
    reporter.log_summary(1, 1)

    assert [kind for kind, _ in reporter.events] == [
        "description",
        "result",
        "error",
        "summary",
    ]
    assert reporter.descriptions == ["a"]
    assert reporter.results == [(Diagnostic(True),)]
    assert reporter.errors == ["oops"]
    assert reporter.summaries == [(1, 1)]
