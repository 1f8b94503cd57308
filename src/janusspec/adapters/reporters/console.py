"""Colorized console reporter.

Spec results go to stdout; body errors and timeouts go to stderr so they
stay visible when stdout is piped.
"""

from collections.abc import Sequence

import click

from janusspec.domain.outcome import NO_ASSERTIONS_MESSAGE, Diagnostic
from janusspec.interfaces.reporter import Reporter

from .glyphs import caution_glyph, fail_glyph, pass_glyph

INDENT = "      "


class ConsoleReporter(Reporter):
    """Renders each spec as a description line followed by a verdict.

    Args:
        color: Force color on (True) or off (False); None lets click decide
            based on whether the stream is a terminal.
    """

    def __init__(self, color: bool | None = None) -> None:
        self.color = color

    def log_description(self, text: str) -> None:
        click.secho(text, bold=True, color=self.color)

    def log_result(self, diagnostics: Sequence[Diagnostic]) -> None:
        if not diagnostics:
            click.secho(f"> ERROR: {NO_ASSERTIONS_MESSAGE}", fg="red", color=self.color)
            return
        failures = [d for d in diagnostics if not d.passed]
        if not failures:
            click.secho(f"> [{pass_glyph()}] Passed!", fg="green", color=self.color)
            return
        click.secho(f"> [{fail_glyph()}] Failed.", fg="red", bold=True, color=self.color)
        for failure in failures:
            click.secho(f"{INDENT}{failure.message}", fg="yellow", color=self.color)

    def log_error(self, text: str) -> None:
        click.secho(
            f"{caution_glyph()}  {text}", fg="red", bold=True, err=True, color=self.color
        )

    def log_summary(self, passed_count: int, total_count: int) -> None:
        failed = total_count - passed_count
        ok = total_count > 0 and failed == 0
        click.echo(color=self.color)
        click.secho(
            f"{passed_count}/{total_count} specs passed"
            + (f", {failed} failed" if failed else ""),
            fg="green" if ok else "red",
            bold=True,
            color=self.color,
        )
