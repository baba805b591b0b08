"""Main interactive event loop for the terminal UI.

Key events and resize notifications share one queue. Resize signals only
enqueue an event; the loop consumes it at the top of the next iteration.
This loop is intentionally wiring-heavy; feature logic lives in callbacks.
"""

from __future__ import annotations

import logging
import os
import shutil
import signal
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from ..controller import BatchRequest, NavigationController, RenderView
from ..input import read_key
from ..render import viewport_height
from ..spawn import SpawnRequest
from ..terminal import TerminalController

logger = logging.getLogger(__name__)

RESIZE_EVENT = "RESIZE"
READ_TIMEOUT_MS = 120


class EventQueue:
    """FIFO of pending non-key events (currently only resize)."""

    def __init__(self) -> None:
        self._events: deque[str] = deque()

    def push(self, event: str) -> None:
        self._events.append(event)

    def pop(self) -> str | None:
        if not self._events:
            return None
        return self._events.popleft()

    def __len__(self) -> int:
        return len(self._events)


def install_resize_handler(events: EventQueue):
    """Route ``SIGWINCH`` into ``events``; returns the previous handler."""

    def on_winch(_signum, _frame) -> None:
        events.push(RESIZE_EVENT)

    return signal.signal(signal.SIGWINCH, on_winch)


def restore_resize_handler(previous) -> None:
    signal.signal(signal.SIGWINCH, previous if previous is not None else signal.SIG_DFL)


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected side effects used by ``run_main_loop``."""

    render: Callable[[RenderView, int], None]
    run_spawn: Callable[[SpawnRequest], None]
    handle_batch: Callable[[BatchRequest], None]


def normalize_enter(key: str, skip_next_lf: bool) -> tuple[str | None, bool]:
    """Fold CR, LF, and CRLF into a single ``ENTER`` token.

    Returns ``(key_or_None, skip_next_lf)``; ``None`` means drop this byte.
    """
    if key == "ENTER_LF" and skip_next_lf:
        return None, False
    if key == "ENTER_CR":
        return "ENTER", True
    if key == "ENTER_LF":
        return "ENTER", False
    return key, False


def run_main_loop(
    controller: NavigationController,
    terminal: TerminalController,
    stdin_fd: int,
    events: EventQueue,
    callbacks: RuntimeLoopCallbacks,
    get_terminal_size: Callable[[tuple[int, int]], os.terminal_size] = shutil.get_terminal_size,
) -> None:
    """Run the interactive loop until the quit key is pressed."""
    skip_next_lf = False
    with terminal.raw_mode():
        while True:
            event = events.pop()
            while event is not None:
                if event == RESIZE_EVENT:
                    controller.resize(viewport_height(get_terminal_size((80, 24)).lines))
                event = events.pop()

            if controller.dirty:
                term = get_terminal_size((80, 24))
                callbacks.render(controller.render_view(), term.columns)
                controller.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=READ_TIMEOUT_MS)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            normalized, skip_next_lf = normalize_enter(key, skip_next_lf)
            if normalized is None:
                continue

            if controller.handle_key(normalized):
                logger.info("quit requested")
                break

            spawn_request = controller.take_spawn_request()
            if spawn_request is not None:
                callbacks.run_spawn(spawn_request)
                # The terminal may have been resized while the child owned it.
                events.push(RESIZE_EVENT)
            batch_request = controller.take_batch_request()
            if batch_request is not None:
                callbacks.handle_batch(batch_request)
