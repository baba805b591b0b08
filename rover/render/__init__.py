"""Rendering engine for the tabbed directory listing.

Composes one full ANSI frame from a ``RenderView`` without touching
controller state. ``build_frame`` is pure; ``render_frame`` writes it.
"""

from __future__ import annotations

import os
import sys

from ..ansi import clip_ansi_line, display_width, pad_to_width, sanitize
from ..controller import RenderRow, RenderView
from ..ui_theme import UITheme
from .help import help_lines

SCROLLBAR_CHAR = "▒"
STATUS_WIDTH = 15
SEARCH_PROMPT = "search: "
CHROME_ROWS = 4


def viewport_height(term_lines: int) -> int:
    """Listing rows available once header, borders, and status row are drawn."""
    return max(1, term_lines - CHROME_ROWS)


def scrollbar_span(scroll_top: int, total: int, height: int) -> tuple[int, int] | None:
    """Return ``(first_row, rows)`` of the scrollbar thumb, or ``None`` when it fits."""
    if total <= height:
        return None
    center = (scroll_top + (height >> 1)) * height // total
    rows = max(1, (height - 1) * height // total)
    first = max(0, min(center - (rows >> 1), height - rows))
    return first, rows


def format_row(row: RenderRow, width: int, theme: UITheme) -> str:
    """Format one listing row to exactly ``width`` columns."""
    entry = row.entry
    mark = f"{theme.mark}*{theme.reset}" if row.marked else " "
    name = sanitize(entry.display_name)
    if entry.hidden:
        color = theme.hidden
    elif entry.is_dir:
        color = theme.dir
    else:
        color = theme.file
    body_width = max(0, width - 1)
    if entry.is_dir:
        body = pad_to_width(name, body_width)
    else:
        size = str(entry.size)
        name_width = max(0, body_width - len(size) - 1)
        body = pad_to_width(name, name_width) + " " + size
        body = pad_to_width(body, body_width)
    text = f"{color}{body}{theme.reset}" if color else body
    if row.selected:
        return mark + theme.reverse + body + theme.reset
    return mark + text


def build_status(view: RenderView) -> str:
    """Right-hand status cell: filter flags plus ``selected/total``."""
    if view.total == 0 or view.selected is None:
        position = "0/0"
    else:
        position = f"{view.selected + 1}/{view.total}"
    return f"{view.filter_label}{position:>12}"


def build_prompt(view: RenderView, theme: UITheme) -> str:
    """Left-hand bottom cell: search prompt, status message, or mark count."""
    if view.search_active:
        if view.search_no_match:
            color = theme.search_no_match
        elif view.search_matched and view.search_query:
            color = theme.search_match
        else:
            color = ""
        query = sanitize(view.search_query)
        styled_query = f"{color}{query}{theme.reset}" if color else query
        return f"{theme.prompt}{SEARCH_PROMPT}{theme.reset}{styled_query}"
    if view.status_message:
        return view.status_message
    if view.marked_count:
        return f"{theme.mark}{view.marked_count} marked{theme.reset}"
    return ""


def build_frame(view: RenderView, width: int, theme: UITheme) -> str:
    """Compose a complete frame for a terminal ``width`` columns wide."""
    width = max(STATUS_WIDTH + 4, width)
    inner = width - 2
    out: list[str] = ["\033[H\033[J"]

    path_text = clip_ansi_line(sanitize(view.path), max(0, width - 5))
    header = f"{theme.cwd}{path_text}{theme.reset}"
    gap = " " * max(0, width - 4 - display_width(path_text))
    out.append(f"{header}{gap}{theme.bold}{theme.tab_number}{view.tab_number}{theme.reset}\r\n")
    out.append(f"{theme.border}┌{'─' * inner}┐{theme.reset}\r\n")

    thumb = scrollbar_span(view.scroll_top, view.total, view.height)
    if view.show_help:
        content = [pad_to_width(line, inner) for line in help_lines(theme)]
    else:
        content = [format_row(row, inner, theme) for row in view.rows]
        if not content and view.error:
            content = [f"{theme.error}{pad_to_width(sanitize(view.error), inner)}{theme.reset}"]
    for row in range(view.height):
        line = content[row] if row < len(content) else " " * inner
        right = f"{theme.border}│{theme.reset}"
        if thumb is not None and not view.show_help and thumb[0] <= row < thumb[0] + thumb[1]:
            right = f"{theme.scrollbar}{SCROLLBAR_CHAR}{theme.reset}"
        out.append(f"{theme.border}│{theme.reset}{line}{right}\r\n")
    out.append(f"{theme.border}└{'─' * inner}┘{theme.reset}\r\n")

    prompt = clip_ansi_line(build_prompt(view, theme), width - STATUS_WIDTH - 2)
    prompt_gap = " " * max(0, width - 1 - STATUS_WIDTH - display_width(prompt))
    out.append(f"{prompt}{theme.reset}{prompt_gap}{theme.status}{build_status(view)}{theme.reset}")
    return "".join(out)


def render_frame(view: RenderView, width: int, theme: UITheme) -> None:
    """Write one frame to stdout."""
    frame = build_frame(view, width, theme)
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = [
    "CHROME_ROWS",
    "build_frame",
    "build_prompt",
    "build_status",
    "format_row",
    "render_frame",
    "scrollbar_span",
    "viewport_height",
]
