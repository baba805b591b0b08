"""ANSI-aware text measurement and clipping.

Keeps rendering aligned when colour codes and wide characters are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_ANSI_SPLIT_RE = re.compile(f"({ANSI_ESCAPE_RE.pattern})")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Display width of ``text`` ignoring ANSI escape sequences."""
    return sum(char_display_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


def sanitize(text: str) -> str:
    """Replace control characters so file names cannot drive the terminal."""
    return "".join("?" if unicodedata.category(ch) == "Cc" else ch for ch in text)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0:
        return ""
    pieces: list[str] = []
    used = 0
    for token in _ANSI_SPLIT_RE.split(text):
        if token.startswith("\x1b") and ANSI_ESCAPE_RE.fullmatch(token):
            pieces.append(token)
            continue
        for ch in token:
            used += char_display_width(ch)
            if used > max_cols:
                return "".join(pieces)
            pieces.append(ch)
    return "".join(pieces)


def pad_to_width(text: str, width: int) -> str:
    """Clip and right-pad ``text`` with spaces to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))
