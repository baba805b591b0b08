"""Per-tab navigation state and its transitions.

Each ``Tab`` owns a path, the listing produced for it, a cursor, a scroll
offset, a filter mask, and a mark set. Every operation that touches the
cursor leaves the tab satisfying the window invariant::

    0 <= scroll_top <= max(0, len(entries) - height)
    scroll_top <= selected <= scroll_top + height - 1

Viewport ``height`` belongs to the controller and is passed in explicitly.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .listing import DEFAULT_FILTER_MASK, DirectoryUnreadable, Entry, FilterMask, list_directory

logger = logging.getLogger(__name__)

TAB_COUNT = 10
INITIAL_ACTIVE_TAB = 1


def normalize_dir_path(path: str) -> str:
    """Return ``path`` as an absolute directory path ending in ``os.sep``."""
    absolute = os.path.abspath(os.path.expanduser(path))
    if not absolute.endswith(os.sep):
        absolute += os.sep
    return absolute


def is_readable_directory(path: str) -> bool:
    """Return whether ``path`` can be opened for listing."""
    try:
        with os.scandir(path):
            return True
    except OSError:
        return False


def home_directory() -> str:
    """Resolve the home directory from ``$HOME``, falling back to the user database."""
    home = os.environ.get("HOME", "").strip()
    if not home:
        home = os.path.expanduser("~")
    return normalize_dir_path(home)


def initial_tab_paths(
    args: Sequence[str],
    home: str,
    cwd: str,
    readable=is_readable_directory,
) -> list[str]:
    """Assign startup paths to all tabs from command-line directory arguments.

    Tab 0 is the home directory. Tabs ``1..N`` take the arguments in order,
    substituting ``home`` for any that cannot be opened. Remaining tabs start
    in ``cwd``.
    """
    paths = [normalize_dir_path(home)]
    for raw in list(args)[: TAB_COUNT - 1]:
        paths.append(normalize_dir_path(raw) if readable(raw) else normalize_dir_path(home))
    while len(paths) < TAB_COUNT:
        paths.append(normalize_dir_path(cwd))
    return paths


def parent_path(path: str) -> tuple[str, str] | None:
    """Split ``/a/b/`` into ``("/a/", "b")``; ``None`` for the filesystem root."""
    stripped = path.rstrip(os.sep)
    if not stripped:
        return None
    parent, child = os.path.split(stripped)
    if not child:
        return None
    return normalize_dir_path(parent or os.sep), child


@dataclass
class Tab:
    """One independent navigation context."""

    path: str
    filter_mask: FilterMask = DEFAULT_FILTER_MASK
    entries: list[Entry] = field(default_factory=list)
    selected: int = 0
    scroll_top: int = 0
    marks: set[str] = field(default_factory=set)
    error: str | None = None

    def __post_init__(self) -> None:
        self.path = normalize_dir_path(self.path)

    def selected_entry(self) -> Entry | None:
        if not self.entries:
            return None
        return self.entries[self.selected]

    def max_scroll_top(self, height: int) -> int:
        return max(0, len(self.entries) - max(1, height))

    def clamp(self, height: int) -> None:
        """Restore the window invariant with the smallest scroll adjustment."""
        height = max(1, height)
        if not self.entries:
            self.selected = 0
            self.scroll_top = 0
            return
        self.selected = max(0, min(self.selected, len(self.entries) - 1))
        self.scroll_top = max(0, min(self.scroll_top, self.max_scroll_top(height)))
        if self.selected < self.scroll_top:
            self.scroll_top = self.selected
        elif self.selected >= self.scroll_top + height:
            self.scroll_top = self.selected - height + 1

    def refresh(self, height: int) -> None:
        """Re-list ``path`` under ``filter_mask`` and re-clamp the cursor."""
        try:
            self.entries = list_directory(self.path, self.filter_mask)
            self.error = None
        except DirectoryUnreadable as exc:
            logger.warning("cannot list %s: %s", self.path, exc)
            self.entries = []
            self.error = str(exc)
        self.clamp(height)

    def set_path(self, new_path: str, reset_cursor: bool, height: int) -> None:
        """Point the tab at ``new_path`` and re-list it.

        Marks are keyed by name, so they only survive while the directory
        stays the same.
        """
        new_path = normalize_dir_path(new_path)
        if new_path != self.path:
            self.marks.clear()
        self.path = new_path
        if reset_cursor:
            self.selected = 0
            self.scroll_top = 0
        self.refresh(height)

    def toggle_filter(self, flag: FilterMask, height: int) -> None:
        """Flip one filter bit; the cursor always resets afterwards."""
        self.filter_mask ^= flag
        self.set_path(self.path, True, height)

    def move_cursor(self, delta: int, height: int) -> bool:
        """Move the selection by ``delta`` rows.

        A single step past either end wraps to the other end; larger steps
        clamp. Returns ``False`` when the listing is empty.
        """
        if not self.entries or delta == 0:
            return False
        height = max(1, height)
        last = len(self.entries) - 1
        if delta == 1 and self.selected == last:
            self.selected = 0
            self.scroll_top = 0
        elif delta == -1 and self.selected == 0:
            self.selected = last
            self.scroll_top = self.max_scroll_top(height)
        else:
            self.selected = max(0, min(self.selected + delta, last))
        self.clamp(height)
        return True

    def jump(self, delta: int, height: int) -> bool:
        """Move selection and scroll together by ``delta`` rows, clamping both."""
        if not self.entries or delta == 0:
            return False
        last = len(self.entries) - 1
        self.selected = max(0, min(self.selected + delta, last))
        self.scroll_top = max(0, min(self.scroll_top + delta, self.max_scroll_top(height)))
        self.clamp(height)
        return True

    def descend(self, height: int) -> bool:
        """Enter the selected directory; no-op on files or empty listings."""
        entry = self.selected_entry()
        if entry is None or not entry.is_dir:
            return False
        self.set_path(self.path + entry.name, True, height)
        return True

    def ascend(self, height: int) -> bool:
        """Go to the parent directory and re-select the directory just left."""
        split = parent_path(self.path)
        if split is None:
            return False
        parent, child = split
        self.set_path(parent, True, height)
        if not self.filter_mask & FilterMask.DIRS:
            return True
        if child.startswith(".") and not self.filter_mask & FilterMask.HIDDEN:
            return True
        for idx, entry in enumerate(self.entries):
            if entry.is_dir and entry.name == child:
                self.selected = idx
                if len(self.entries) > height:
                    self.scroll_top = max(0, min(idx - height // 2, self.max_scroll_top(height)))
                self.clamp(height)
                break
        return True

    def toggle_mark(self, name: str) -> None:
        if name in self.marks:
            self.marks.discard(name)
        else:
            self.marks.add(name)

    def invert_all_marks(self) -> None:
        names = {entry.name for entry in self.entries}
        self.marks = (names - self.marks) | (self.marks - names)

    def mark_all(self) -> None:
        self.marks.update(entry.name for entry in self.entries)

    def marked_names(self) -> list[str]:
        """Marked names present in the current listing, in listing order."""
        return [entry.name for entry in self.entries if entry.name in self.marks]


class TabSet:
    """Fixed array of ten tabs plus the active-tab index."""

    def __init__(self, paths: Iterable[str], active: int = INITIAL_ACTIVE_TAB) -> None:
        self.tabs: tuple[Tab, ...] = tuple(Tab(path=normalize_dir_path(path)) for path in paths)
        if len(self.tabs) != TAB_COUNT:
            raise ValueError(f"expected {TAB_COUNT} tab paths, got {len(self.tabs)}")
        if not 0 <= active < TAB_COUNT:
            raise ValueError(f"active tab out of range: {active}")
        self.active_index = active

    @property
    def active(self) -> Tab:
        return self.tabs[self.active_index]

    def __getitem__(self, index: int) -> Tab:
        return self.tabs[index]

    def __len__(self) -> int:
        return len(self.tabs)

    def switch(self, index: int, height: int) -> None:
        """Activate tab ``index`` and re-list it without resetting its cursor."""
        if not 0 <= index < TAB_COUNT:
            raise IndexError(index)
        self.active_index = index
        self.active.set_path(self.active.path, False, height)

    def clamp_all(self, height: int) -> None:
        for tab in self.tabs:
            tab.clamp(height)


__all__ = [
    "INITIAL_ACTIVE_TAB",
    "TAB_COUNT",
    "Tab",
    "TabSet",
    "home_directory",
    "initial_tab_paths",
    "is_readable_directory",
    "normalize_dir_path",
    "parent_path",
]
