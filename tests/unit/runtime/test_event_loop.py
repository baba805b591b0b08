"""Tests for the runtime event loop and its composition helpers."""

from __future__ import annotations

import os
import signal
import tempfile
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from rover.controller import BatchRequest, NavigationController
from rover.runtime import app
from rover.runtime.loop import (
    RESIZE_EVENT,
    EventQueue,
    RuntimeLoopCallbacks,
    install_resize_handler,
    normalize_enter,
    restore_resize_handler,
    run_main_loop,
)
from rover.spawn import SpawnRequest
from rover.tabs import TAB_COUNT, TabSet


class _FakeTerminal:
    def __init__(self) -> None:
        self.raw_mode_entries = 0
        self.mode_calls: list[str] = []

    @contextmanager
    def raw_mode(self):
        self.raw_mode_entries += 1
        yield

    def disable_tui_mode(self) -> None:
        self.mode_calls.append("disable")

    def enable_tui_mode(self) -> None:
        self.mode_calls.append("enable")


class NormalizeEnterTests(unittest.TestCase):
    def test_crlf_folds_to_single_enter(self) -> None:
        key, skip = normalize_enter("ENTER_CR", False)
        self.assertEqual((key, skip), ("ENTER", True))
        self.assertEqual(normalize_enter("ENTER_LF", skip), (None, False))

    def test_lone_lf_is_enter(self) -> None:
        self.assertEqual(normalize_enter("ENTER_LF", False), ("ENTER", False))

    def test_other_keys_clear_skip(self) -> None:
        self.assertEqual(normalize_enter("j", True), ("j", False))


class EventQueueTests(unittest.TestCase):
    def test_queue_is_fifo(self) -> None:
        events = EventQueue()
        events.push("a")
        events.push("b")

        self.assertEqual(len(events), 2)
        self.assertEqual([events.pop(), events.pop(), events.pop()], ["a", "b", None])

    def test_resize_signal_enqueues_event(self) -> None:
        events = EventQueue()
        previous = install_resize_handler(events)
        try:
            handler = signal.getsignal(signal.SIGWINCH)
            handler(signal.SIGWINCH, None)
        finally:
            restore_resize_handler(previous)

        self.assertEqual(events.pop(), RESIZE_EVENT)


class RunMainLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        root = Path(self._tmp.name).resolve()
        for name in ("a.txt", "b.txt", "c.txt"):
            (root / name).write_text(name, encoding="utf-8")
        self.root = root
        self.controller = NavigationController(TabSet([str(root)] * TAB_COUNT), height=20)
        self.controller.start()
        self.terminal = _FakeTerminal()
        self.render = mock.Mock()
        self.run_spawn = mock.Mock()
        self.handle_batch = mock.Mock()
        self.callbacks = RuntimeLoopCallbacks(
            render=self.render,
            run_spawn=self.run_spawn,
            handle_batch=self.handle_batch,
        )

    def _run(self, keys: list, events: EventQueue | None = None, lines: int = 24) -> None:
        with mock.patch("rover.runtime.loop.read_key", side_effect=keys):
            run_main_loop(
                self.controller,
                self.terminal,
                0,
                events or EventQueue(),
                self.callbacks,
                get_terminal_size=lambda _fallback: os.terminal_size((72, lines)),
            )

    def test_renders_first_frame_and_quits(self) -> None:
        self._run(["q"])

        self.assertEqual(self.terminal.raw_mode_entries, 1)
        self.render.assert_called_once()
        view, columns = self.render.call_args.args
        self.assertEqual(columns, 72)
        self.assertEqual(view.total, 3)

    def test_only_dirty_state_triggers_render(self) -> None:
        self._run(["", "Z", "j", "q"])

        self.assertEqual(self.render.call_count, 2)
        self.assertEqual(self.controller.tabs.active.selected, 1)

    def test_interrupt_during_read_is_ignored(self) -> None:
        self._run([KeyboardInterrupt(), "j", "q"])

        self.assertEqual(self.controller.tabs.active.selected, 1)

    def test_crlf_spawns_one_shell_and_queues_resize(self) -> None:
        events = EventQueue()

        self._run(["ENTER_CR", "ENTER_LF", "q"], events=events, lines=10)

        self.run_spawn.assert_called_once_with(SpawnRequest(kind="shell", cwd=str(self.root) + os.sep))
        self.assertEqual(self.controller.height, 6)

    def test_resize_event_updates_viewport_height(self) -> None:
        events = EventQueue()
        events.push(RESIZE_EVENT)

        self._run(["q"], events=events, lines=8)

        self.assertEqual(self.controller.height, 4)
        view, _columns = self.render.call_args.args
        self.assertEqual(view.height, 4)

    def test_batch_request_is_handed_off(self) -> None:
        self._run(["a", "X", "q"])

        self.handle_batch.assert_called_once_with(
            BatchRequest(operation="delete", directory=str(self.root) + os.sep, names=("a.txt", "b.txt", "c.txt"))
        )


class AppCompositionTests(unittest.TestCase):
    def _controller(self, root: Path) -> NavigationController:
        controller = NavigationController(TabSet([str(root)] * TAB_COUNT), height=10)
        controller.start()
        return controller

    def test_report_batch_request_sets_status(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            controller = self._controller(Path(tmp))

            app.report_batch_request(controller, BatchRequest("copy", "/srv/", ("one",)))

        self.assertEqual(controller.status_message, "copy: 1 marked entry")

    def test_spawn_runner_refreshes_listing_after_child_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            controller = self._controller(root)
            terminal = _FakeTerminal()

            def fake_run(cmd, cwd, disable, enable):
                disable()
                (root / "created.txt").write_text("", encoding="utf-8")
                enable()
                return None

            with mock.patch.dict("os.environ", {"SHELL": "/bin/sh"}), mock.patch(
                "rover.runtime.app.run_program", side_effect=fake_run
            ) as run_program:
                app.make_spawn_runner(controller, terminal)(SpawnRequest("shell", str(root) + os.sep))

            names = [entry.name for entry in controller.tabs.active.entries]

        self.assertEqual(run_program.call_args.args[0], ["/bin/sh"])
        self.assertEqual(terminal.mode_calls, ["disable", "enable"])
        self.assertEqual(names, ["created.txt"])

    def test_spawn_runner_reports_launch_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            controller = self._controller(Path(tmp))
            with mock.patch.dict("os.environ", {"EDITOR": "missing-editor"}), mock.patch(
                "rover.runtime.app.run_program", return_value="Failed to launch missing-editor: boom"
            ):
                app.make_spawn_runner(controller, _FakeTerminal())(SpawnRequest("editor", tmp, "x.txt"))

        self.assertEqual(controller.status_message, "Failed to launch missing-editor: boom")

    def test_spawn_runner_skips_unset_program(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            controller = self._controller(Path(tmp))
            with mock.patch.dict("os.environ", {"PAGER": ""}), mock.patch(
                "rover.runtime.app.run_program"
            ) as run_program:
                app.make_spawn_runner(controller, _FakeTerminal())(SpawnRequest("pager", tmp, "x.txt"))

        run_program.assert_not_called()

    def test_build_controller_starts_on_tab_one(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "work").mkdir()
            with mock.patch("rover.runtime.app.home_directory", return_value=str(root) + os.sep), mock.patch(
                "rover.runtime.app.os.getcwd", return_value=str(root)
            ):
                controller = app.build_controller([str(root / "work"), str(root / "missing")], term_lines=24)

        tabs = controller.tabs
        self.assertEqual(tabs.active_index, 1)
        self.assertEqual(controller.height, 20)
        self.assertEqual(tabs[0].path, str(root) + os.sep)
        self.assertEqual(tabs[1].path, str(root / "work") + os.sep)
        self.assertEqual(tabs[2].path, str(root) + os.sep)
        self.assertEqual(tabs[9].path, str(root) + os.sep)


if __name__ == "__main__":
    unittest.main()
