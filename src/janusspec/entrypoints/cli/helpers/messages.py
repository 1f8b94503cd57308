"""Terminal message helpers for the janusspec CLI.

Messages write to stderr so the spec report on stdout stays machine-readable.
"""

import click

from janusspec.adapters.reporters.glyphs import caution_glyph, pick_glyph


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr** with a caution glyph.

    Example:
        ``⚠️  No specs were registered.``
    """
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to **stderr**."""
    click.secho(f"{pick_glyph('✅', '[OK]', True)}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr**.

    Example:
        ``❌  Could not load spec file 'specs.py': ...``
    """
    click.secho(f"{pick_glyph('❌', '[X]', True)}  {msg}", fg="red", bold=True, err=True)
