"""Terminal glyph helpers with emoji/Unicode → ASCII fallbacks.

Terminals that cannot encode a glyph get its ASCII fallback so rendering
never raises `UnicodeEncodeError`.
"""

import click


def _supports_character(character: str, err: bool = False) -> bool:
    """Return True if *character* can be encoded on stdout (or stderr).

    Args:
        character: The glyph to probe (e.g., "✔").
        err: Probe stderr instead of stdout.
    """
    stream = click.get_text_stream("stderr" if err else "stdout")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def pick_glyph(glyph: str, fallback: str, err: bool = False) -> str:
    """Return `glyph` if the stream can encode it, else `fallback`."""
    return glyph if _supports_character(glyph, err) else fallback


def pass_glyph(err: bool = False) -> str:
    """Return "✔" or the ASCII fallback "+"."""
    return pick_glyph("✔", "+", err)


def fail_glyph(err: bool = False) -> str:
    """Return "✖" or the ASCII fallback "x"."""
    return pick_glyph("✖", "x", err)


def caution_glyph(err: bool = True) -> str:
    """Return "⚠️" or the ASCII fallback "[!]"."""
    return pick_glyph("⚠️", "[!]", err)
