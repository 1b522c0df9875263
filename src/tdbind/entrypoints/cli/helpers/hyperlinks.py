"""OSC-8 hyperlinks for terminal output.

Links are emitted only when the stream looks like a terminal known to render
them; everywhere else the bare URL is printed.
"""

import os
import sys
from typing import TextIO

OSC8_TERMINAL_PROGRAMS = frozenset(
    {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}
)
OSC8_TERM_PREFIXES = ("alacritty", "konsole")


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Guess whether `stream` renders OSC-8 hyperlinks.

    Args:
        stream: Stream to check; defaults to ``sys.stdout``.

    Returns:
        bool: False for anything that is not a TTY, otherwise whether the
        terminal is on a small allowlist (``TERM_PROGRAM``, Windows Terminal,
        VTE-based terminals, and a few ``TERM`` prefixes).
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    return bool(
        (os.getenv("TERM_PROGRAM") or "").lower() in OSC8_TERMINAL_PROGRAMS
        or os.getenv("WT_SESSION")
        or os.getenv("VTE_VERSION")
        or os.getenv("TERM", "").startswith(OSC8_TERM_PREFIXES)
    )


def hyperlink(url: str, text: str | None = None) -> str:
    """Render `url` as a clickable link, or as plain text where unsupported.

    Args:
        url: Link target.
        text: Visible label; defaults to the URL itself.
    """
    if not supports_osc8():
        return url
    return f"\x1b]8;;{url}\x07{text or url}\x1b]8;;\x07"
