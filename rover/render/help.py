"""Help panel content.

Built from the static key-binding table so the panel never drifts from the
keys the controller actually dispatches.
"""

from __future__ import annotations

from ..input.bindings import keys_for
from ..ui_theme import UITheme

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "MOVE",
        (
            ("down", "next entry"),
            ("up", "previous entry"),
            ("jump_down", "jump down"),
            ("jump_up", "jump up"),
            ("cd_down", "enter directory"),
            ("cd_up", "parent directory"),
            ("home", "home directory"),
        ),
    ),
    (
        "RUN",
        (
            ("shell", "open $SHELL"),
            ("view", "open file in $PAGER"),
            ("edit", "open file in $EDITOR"),
        ),
    ),
    (
        "FILTER + SEARCH",
        (
            ("search", "incremental search (Esc cancels)"),
            ("toggle_files", "show/hide files"),
            ("toggle_dirs", "show/hide directories"),
            ("toggle_hidden", "show/hide hidden entries"),
        ),
    ),
    (
        "MARKS",
        (
            ("toggle_mark", "mark/unmark entry"),
            ("invert_marks", "invert marks"),
            ("mark_all", "mark all"),
            ("delete_marked", "delete marked"),
            ("copy_marked", "copy marked"),
        ),
    ),
)

_KEY_LABELS = {
    " ": "Space",
    "ENTER": "Enter",
    "UP": "Up",
    "DOWN": "Down",
    "LEFT": "Left",
    "RIGHT": "Right",
    "PAGE_UP": "PgUp",
    "PAGE_DOWN": "PgDn",
    "CTRL_L": "Ctrl+L",
}


def key_label(action: str) -> str:
    """Human-readable key list for ``action``."""
    return "/".join(_KEY_LABELS.get(combo, combo) for combo in keys_for(action))


def help_lines(theme: UITheme) -> list[str]:
    """Return styled help rows for the listing area."""
    lines: list[str] = []
    for heading, rows in HELP_SECTIONS:
        lines.append(f"{theme.help_heading}{heading}{theme.reset}")
        for action, description in rows:
            lines.append(f"  {theme.help_key}{key_label(action):<12}{theme.reset} {description}")
    lines.append(f"{theme.help_heading}TABS{theme.reset}")
    lines.append(f"  {theme.help_key}{'0-9':<12}{theme.reset} switch tab")
    lines.append(f"  {theme.help_key}{key_label('help'):<12}{theme.reset} close help   {theme.help_key}{key_label('quit')}{theme.reset} quit")
    return lines
