"""Runtime composition layer for rover.

Builds the tab set and controller, wires spawn/batch/render callbacks, and
starts the loop. This is the only module where terminal, processes, and
navigation state meet.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable, Sequence

from ..controller import BatchRequest, NavigationController
from ..input import RV_JUMP
from ..render import render_frame, viewport_height
from ..spawn import SpawnRequest, SpawnUnavailable, build_spawn_command, run_program
from ..tabs import TabSet, home_directory, initial_tab_paths
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .loop import (
    RESIZE_EVENT,
    EventQueue,
    RuntimeLoopCallbacks,
    install_resize_handler,
    restore_resize_handler,
    run_main_loop,
)

logger = logging.getLogger(__name__)


def build_controller(paths: Sequence[str], term_lines: int, jump: int = RV_JUMP) -> NavigationController:
    """Create the ten tabs from CLI paths and list the active one."""
    tabs = TabSet(initial_tab_paths(paths, home_directory(), os.getcwd()))
    controller = NavigationController(tabs, viewport_height(term_lines), jump=jump)
    controller.start()
    return controller


def report_batch_request(controller: NavigationController, request: BatchRequest) -> None:
    """Default batch handler: record the request; execution lives elsewhere."""
    logger.info("%s requested in %s for %s", request.operation, request.directory, list(request.names))
    count = len(request.names)
    noun = "entry" if count == 1 else "entries"
    controller.set_status(f"{request.operation}: {count} marked {noun}")


def make_spawn_runner(
    controller: NavigationController,
    terminal: TerminalController,
) -> Callable[[SpawnRequest], None]:
    def run_spawn(request: SpawnRequest) -> None:
        try:
            cmd = build_spawn_command(request)
        except SpawnUnavailable as exc:
            logger.debug("%s", exc)
            return
        error = run_program(cmd, request.cwd, terminal.disable_tui_mode, terminal.enable_tui_mode)
        controller.refresh_active()
        if error:
            controller.set_status(error)

    return run_spawn


def run_browser(
    paths: Sequence[str],
    theme_name: str | None = None,
    no_color: bool = False,
    jump: int = RV_JUMP,
    batch_handler: Callable[[NavigationController, BatchRequest], None] = report_batch_request,
) -> None:
    """Run the interactive browser on the controlling terminal."""
    term = shutil.get_terminal_size((80, 24))
    controller = build_controller(paths, term.lines, jump=jump)
    theme = resolve_theme(theme_name, no_color=no_color)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    events = EventQueue()

    callbacks = RuntimeLoopCallbacks(
        render=lambda view, columns: render_frame(view, columns, theme),
        run_spawn=make_spawn_runner(controller, terminal),
        handle_batch=lambda request: batch_handler(controller, request),
    )
    previous_handler = install_resize_handler(events)
    # Pick up any size change between startup and the first frame.
    events.push(RESIZE_EVENT)
    try:
        run_main_loop(controller, terminal, stdin_fd, events, callbacks)
    finally:
        restore_resize_handler(previous_handler)
