"""User-facing status lines for the tdbind CLI.

Every line goes to stderr so generated output or piped data on stdout stays
clean. Emoji markers fall back to ASCII on terminals that cannot encode them.
"""

import click

CAUTION = ("⚠️", "[!]")  # pragma: no mutate
SUCCESS = ("✅", "[OK]")  # pragma: no mutate
ERROR = ("❌", "[X]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if `character` can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    try:
        character.encode(getattr(stream, "encoding", None) or "ascii")
    except UnicodeEncodeError:
        return False
    return True


def glyph(marker: tuple[str, str]) -> str:
    """Pick the emoji of an ``(emoji, fallback)`` pair if stderr can show it.

    Example:
        ``glyph(SUCCESS)`` is ``"✅"`` on a UTF-8 terminal and ``"[OK]"``
        otherwise.
    """
    emoji, fallback = marker
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Print a bold yellow warning line, e.g. ``⚠️  No operations emitted.``"""
    click.secho(f"{glyph(CAUTION)}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Print a bold green success line, e.g. ``✅  Wrote 3 files to out/.``"""
    click.secho(f"{glyph(SUCCESS)}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Print a bold red error line, e.g. ``❌  Cannot read schema.json.``"""
    click.secho(f"{glyph(ERROR)}  {msg}", fg="red", bold=True, err=True)
