"""Incremental prefix search over the active tab's listing.

A session snapshots the tab's entries and cursor when it starts. Each query
edit selects the first entry, in listing order, whose name starts with the
query. Emptying the query (or cancelling) restores the starting position.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .listing import Entry
from .tabs import Tab

SEARCH_MAX_LENGTH = 255
SEARCH_CONTEXT_ROWS = 3


def first_prefix_match(entries: Sequence[Entry], query: str) -> int | None:
    """Return the lowest index whose shown name has ``query`` as a case-sensitive prefix.

    Directory names carry their trailing ``/``, so ``"src/"`` selects directory
    ``src`` and never ``src.txt``.
    """
    for idx, entry in enumerate(entries):
        if entry.display_name.startswith(query):
            return idx
    return None


def search_scroll_top(match_idx: int, total: int, height: int, current: int) -> int:
    """Scroll offset that keeps a few rows of context above ``match_idx``.

    Listings that fit in the viewport keep ``current`` unchanged.
    """
    if total <= height:
        return current
    if match_idx < SEARCH_CONTEXT_ROWS:
        return 0
    return min(match_idx - SEARCH_CONTEXT_ROWS, total - height)


@dataclass
class SearchSession:
    """State of one in-progress incremental search."""

    tab: Tab
    entries: list[Entry]
    saved_selected: int
    saved_scroll_top: int
    query: str = ""
    no_match: bool = False
    matched: bool = False

    @classmethod
    def start(cls, tab: Tab) -> SearchSession | None:
        """Begin a session on ``tab``; ``None`` when there is nothing to search."""
        if not tab.entries:
            return None
        return cls(
            tab=tab,
            entries=list(tab.entries),
            saved_selected=tab.selected,
            saved_scroll_top=tab.scroll_top,
        )

    def append(self, ch: str, height: int) -> bool:
        if len(self.query) >= SEARCH_MAX_LENGTH:
            return False
        return self.set_query(self.query + ch, height)

    def backspace(self, height: int) -> bool:
        if not self.query:
            return False
        return self.set_query(self.query[:-1], height)

    def clear(self, height: int) -> bool:
        if not self.query:
            return False
        return self.set_query("", height)

    def set_query(self, query: str, height: int) -> bool:
        """Apply ``query`` and move the tab cursor; returns ``True`` on change."""
        self.query = query[:SEARCH_MAX_LENGTH]
        tab = self.tab
        if not self.query:
            self.restore(height)
            return True
        match_idx = first_prefix_match(self.entries, self.query)
        if match_idx is None:
            self.no_match = True
            self.matched = False
            return True
        self.no_match = False
        self.matched = True
        tab.selected = match_idx
        tab.scroll_top = search_scroll_top(match_idx, len(self.entries), max(1, height), tab.scroll_top)
        tab.clamp(height)
        return True

    def restore(self, height: int | None = None) -> None:
        """Put the tab cursor back where it was when the session started."""
        self.no_match = False
        self.matched = False
        self.tab.selected = self.saved_selected
        self.tab.scroll_top = self.saved_scroll_top
        if height is not None:
            self.tab.clamp(height)


__all__ = [
    "SEARCH_CONTEXT_ROWS",
    "SEARCH_MAX_LENGTH",
    "SearchSession",
    "first_prefix_match",
    "search_scroll_top",
]
