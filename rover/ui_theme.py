"""Colour palettes for the listing frame.

Themes are ANSI palettes for the listing, header, status row, and search
prompt. ``plain`` disables colour entirely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """ANSI sequences keyed by the role they colour in a frame."""

    name: str
    reverse: str
    bold: str
    reset: str
    cwd: str
    status: str
    border: str
    scrollbar: str
    file: str
    dir: str
    hidden: str
    mark: str
    prompt: str
    tab_number: str
    search_match: str
    search_no_match: str
    error: str
    help_heading: str
    help_key: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    bold="\033[1m",
    reset="\033[0m",
    cwd="\033[32m",
    status="\033[34m",
    border="\033[36m",
    scrollbar="\033[34m",
    file="",
    dir="",
    hidden="\033[33m",
    mark="\033[35m",
    prompt="",
    tab_number="",
    search_match="\033[32m",
    search_no_match="\033[31m",
    error="\033[31m",
    help_heading="\033[1;36m",
    help_key="\033[33m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    bold="\033[1m",
    reset="\033[0m",
    cwd="\033[1;38;5;45m",
    status="\033[38;5;73m",
    border="\033[2;38;5;31m",
    scrollbar="\033[38;5;39m",
    file="\033[38;5;252m",
    dir="\033[1;38;5;45m",
    hidden="\033[2;38;5;110m",
    mark="\033[38;5;215m",
    prompt="\033[1;38;5;45m",
    tab_number="\033[1;38;5;153m",
    search_match="\033[38;5;84m",
    search_no_match="\033[38;5;203m",
    error="\033[38;5;203m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="\033[7m",
    bold="",
    reset="\033[0m",
    cwd="",
    status="",
    border="",
    scrollbar="",
    file="",
    dir="",
    hidden="",
    mark="",
    prompt="",
    tab_number="",
    search_match="",
    search_no_match="",
    error="",
    help_heading="",
    help_key="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def _normalize_theme_name(name: str | None) -> str:
    """Lower-case ``name`` and map unknown names to ``default``."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Pick the palette for ``name``; ``plain`` or ``no_color`` disables colour."""
    if no_color or (name or "").strip().lower() == PLAIN_THEME.name:
        return PLAIN_THEME
    return _THEMES[_normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "resolve_theme",
]
