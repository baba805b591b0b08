"""Navigation controller: logical key events in, tab-state mutations out.

The controller owns the tab set, the viewport height, and the optional search
session. It never touches the terminal or spawns processes; side effects are
published as pending requests (``SpawnRequest``/``BatchRequest``) and a
``dirty`` flag that the runtime consumes after every event.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from .input.bindings import DEFAULT_KEY_BINDINGS, RV_JUMP, TAB_KEYS
from .input.key_registry import KeyComboBinding, KeyComboRegistry
from .input.key_search import SearchKeyCallbacks, handle_search_key
from .listing import Entry, FilterMask
from .search import SearchSession
from .spawn import SpawnRequest
from .tabs import TabSet, home_directory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchRequest:
    """Pending delete/copy of marked entries; executed outside the core."""

    operation: str
    directory: str
    names: tuple[str, ...]


@dataclass(frozen=True)
class RenderRow:
    """One visible listing row."""

    index: int
    entry: Entry
    selected: bool
    marked: bool


@dataclass(frozen=True)
class RenderView:
    """Everything the renderer needs for one frame of the active tab."""

    tab_number: int
    path: str
    rows: tuple[RenderRow, ...]
    selected: int | None
    scroll_top: int
    total: int
    height: int
    filter_label: str
    marked_count: int = 0
    error: str | None = None
    search_active: bool = False
    search_query: str = ""
    search_matched: bool = False
    search_no_match: bool = False
    status_message: str = ""
    show_help: bool = False


class NavigationController:
    """Dispatch logical keys to tab-state transitions."""

    def __init__(
        self,
        tabs: TabSet,
        height: int,
        jump: int = RV_JUMP,
        key_bindings: Mapping[str, tuple[str, ...]] = DEFAULT_KEY_BINDINGS,
        home: Callable[[], str] = home_directory,
    ) -> None:
        self.tabs = tabs
        self.height = max(1, height)
        self.jump_size = max(1, jump)
        self._home = home
        self.search: SearchSession | None = None
        self.status_message = ""
        self.show_help = False
        self.dirty = True
        self._spawn_request: SpawnRequest | None = None
        self._batch_request: BatchRequest | None = None
        self._search_callbacks = SearchKeyCallbacks(
            accept_search=self.accept_search,
            cancel_search=self.cancel_search,
            viewport_height=lambda: self.height,
        )
        actions: dict[str, Callable[[], bool]] = {
            "quit": lambda: True,
            "down": lambda: self._cursor(self.tabs.active.move_cursor, 1),
            "up": lambda: self._cursor(self.tabs.active.move_cursor, -1),
            "jump_down": lambda: self._cursor(self.tabs.active.jump, self.jump_size),
            "jump_up": lambda: self._cursor(self.tabs.active.jump, -self.jump_size),
            "cd_down": self.descend,
            "cd_up": self.ascend,
            "home": self.go_home,
            "shell": self.request_shell,
            "view": lambda: self.request_file_spawn("pager"),
            "edit": lambda: self.request_file_spawn("editor"),
            "search": self.start_search,
            "toggle_files": lambda: self.toggle_filter(FilterMask.FILES),
            "toggle_dirs": lambda: self.toggle_filter(FilterMask.DIRS),
            "toggle_hidden": lambda: self.toggle_filter(FilterMask.HIDDEN),
            "toggle_mark": self.toggle_mark,
            "invert_marks": self.invert_marks,
            "mark_all": self.mark_all,
            "delete_marked": lambda: self.request_batch("delete"),
            "copy_marked": lambda: self.request_batch("copy"),
            "help": self.toggle_help,
            "redraw": self.redraw,
        }
        self._registry = KeyComboRegistry()
        for action, combos in key_bindings.items():
            handler = actions.get(action)
            if handler is None:
                logger.warning("ignoring binding for unknown action %r", action)
                continue
            self._registry.register_binding(KeyComboBinding(tuple(combos), handler))
        self._registry.register_bindings(
            *(KeyComboBinding((key,), self._tab_switcher(int(key))) for key in TAB_KEYS)
        )

    # Event entry points

    def start(self) -> None:
        """List the active tab for the first frame."""
        tab = self.tabs.active
        tab.set_path(tab.path, True, self.height)
        self.dirty = True

    def handle_key(self, key: str) -> bool:
        """Handle one logical key and return ``True`` when the app should quit."""
        if self.status_message:
            self.status_message = ""
            self.dirty = True
        if self.search is not None:
            if handle_search_key(key, self.search, self._search_callbacks):
                self.dirty = True
            return False
        handled = self._registry.dispatch(key)
        if handled is None:
            return False
        return bool(handled)

    def resize(self, height: int) -> None:
        """Apply a new viewport height, keeping every tab's cursor."""
        height = max(1, height)
        self.dirty = True
        if height == self.height:
            return
        logger.debug("viewport height %d -> %d", self.height, height)
        self.height = height
        self.tabs.clamp_all(height)

    def refresh_active(self) -> None:
        """Re-list the active tab in place, e.g. after a child process exits."""
        tab = self.tabs.active
        tab.set_path(tab.path, False, self.height)
        self.dirty = True

    def take_spawn_request(self) -> SpawnRequest | None:
        request, self._spawn_request = self._spawn_request, None
        return request

    def take_batch_request(self) -> BatchRequest | None:
        request, self._batch_request = self._batch_request, None
        return request

    def set_status(self, message: str) -> None:
        self.status_message = message
        self.dirty = True

    # Actions

    def _cursor(self, move: Callable[[int, int], bool], delta: int) -> bool:
        if move(delta, self.height):
            self.dirty = True
        return False

    def _tab_switcher(self, index: int) -> Callable[[], bool]:
        def switch() -> bool:
            self.tabs.switch(index, self.height)
            self.dirty = True
            return False

        return switch

    def descend(self) -> bool:
        if self.tabs.active.descend(self.height):
            self.dirty = True
        return False

    def ascend(self) -> bool:
        if self.tabs.active.ascend(self.height):
            self.dirty = True
        return False

    def go_home(self) -> bool:
        self.tabs.active.set_path(self._home(), True, self.height)
        self.dirty = True
        return False

    def toggle_filter(self, flag: FilterMask) -> bool:
        self.tabs.active.toggle_filter(flag, self.height)
        self.dirty = True
        return False

    def request_shell(self) -> bool:
        self._spawn_request = SpawnRequest(kind="shell", cwd=self.tabs.active.path)
        return False

    def request_file_spawn(self, kind: str) -> bool:
        """Queue a pager/editor launch on the selected file; directories are skipped."""
        tab = self.tabs.active
        entry = tab.selected_entry()
        if entry is None or entry.is_dir:
            return False
        self._spawn_request = SpawnRequest(kind=kind, cwd=tab.path, filename=entry.name)
        return False

    def toggle_mark(self) -> bool:
        tab = self.tabs.active
        entry = tab.selected_entry()
        if entry is None:
            return False
        tab.toggle_mark(entry.name)
        self.dirty = True
        return False

    def invert_marks(self) -> bool:
        self.tabs.active.invert_all_marks()
        self.dirty = True
        return False

    def mark_all(self) -> bool:
        self.tabs.active.mark_all()
        self.dirty = True
        return False

    def request_batch(self, operation: str) -> bool:
        tab = self.tabs.active
        names = tab.marked_names()
        if not names:
            return False
        self._batch_request = BatchRequest(operation=operation, directory=tab.path, names=tuple(names))
        return False

    def toggle_help(self) -> bool:
        self.show_help = not self.show_help
        self.dirty = True
        return False

    def redraw(self) -> bool:
        self.dirty = True
        return False

    # Search

    def start_search(self) -> bool:
        session = SearchSession.start(self.tabs.active)
        if session is None:
            return False
        self.search = session
        self.dirty = True
        return False

    def accept_search(self) -> None:
        self.search = None
        self.dirty = True

    def cancel_search(self) -> None:
        if self.search is not None:
            self.search.restore(self.height)
        self.search = None
        self.dirty = True

    # Rendering contract

    def render_view(self) -> RenderView:
        tab = self.tabs.active
        stop = min(len(tab.entries), tab.scroll_top + self.height)
        rows = tuple(
            RenderRow(
                index=idx,
                entry=tab.entries[idx],
                selected=idx == tab.selected,
                marked=tab.entries[idx].name in tab.marks,
            )
            for idx in range(tab.scroll_top, stop)
        )
        search = self.search
        return RenderView(
            tab_number=self.tabs.active_index,
            path=tab.path,
            rows=rows,
            selected=tab.selected if tab.entries else None,
            scroll_top=tab.scroll_top,
            total=len(tab.entries),
            height=self.height,
            filter_label=tab.filter_mask.flags_label(),
            marked_count=len(tab.marked_names()),
            error=tab.error,
            search_active=search is not None,
            search_query=search.query if search is not None else "",
            search_matched=search.matched if search is not None else False,
            search_no_match=search.no_match if search is not None else False,
            status_message=self.status_message,
            show_help=self.show_help,
        )


__all__ = [
    "BatchRequest",
    "NavigationController",
    "RenderRow",
    "RenderView",
]
