"""Search-mode keyboard handling."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..search import SearchSession
from .bindings import SEARCH_ACCEPT_KEYS, SEARCH_CANCEL_KEYS, SEARCH_ERASE_KEYS, SEARCH_KILL_KEYS


@dataclass(frozen=True)
class SearchKeyCallbacks:
    """External operations required for search-mode key handling."""

    accept_search: Callable[[], None]
    cancel_search: Callable[[], None]
    viewport_height: Callable[[], int]


def handle_search_key(
    key: str,
    session: SearchSession,
    callbacks: SearchKeyCallbacks,
) -> bool:
    """Handle one key while a search session is open.

    Returns ``True`` when the key changed visible state. Keys with no search
    meaning are swallowed so they cannot trigger browser actions mid-query.
    """
    height = callbacks.viewport_height()
    if key in SEARCH_ACCEPT_KEYS:
        callbacks.accept_search()
        return True
    if key in SEARCH_CANCEL_KEYS:
        callbacks.cancel_search()
        return True
    if key in SEARCH_ERASE_KEYS:
        return session.backspace(height)
    if key in SEARCH_KILL_KEYS:
        return session.clear(height)
    if len(key) == 1 and key.isprintable():
        return session.append(key, height)
    return False
