"""Tests for shell/pager/editor command construction and launch."""

from __future__ import annotations

import subprocess
import unittest
from unittest import mock

from rover.spawn import SpawnRequest, SpawnUnavailable, build_spawn_command, run_program


class BuildSpawnCommandTests(unittest.TestCase):
    def test_shell_runs_without_arguments(self) -> None:
        request = SpawnRequest(kind="shell", cwd="/srv/")

        self.assertEqual(build_spawn_command(request, {"SHELL": "/bin/zsh"}), ["/bin/zsh"])

    def test_pager_receives_bare_file_name(self) -> None:
        request = SpawnRequest(kind="pager", cwd="/srv/", filename="notes.txt")

        cmd = build_spawn_command(request, {"PAGER": "less -R"})

        self.assertEqual(cmd, ["less", "-R", "notes.txt"])

    def test_editor_command_is_rebuilt_per_request(self) -> None:
        env = {"EDITOR": "vim"}
        first = build_spawn_command(SpawnRequest("editor", "/srv/", "a.txt"), env)
        second = build_spawn_command(SpawnRequest("editor", "/srv/", "b.txt"), env)

        self.assertEqual(first, ["vim", "a.txt"])
        self.assertEqual(second, ["vim", "b.txt"])

    def test_unset_or_blank_variable_raises(self) -> None:
        for env in ({}, {"EDITOR": "   "}):
            with self.assertRaises(SpawnUnavailable) as ctx:
                build_spawn_command(SpawnRequest("editor", "/srv/", "a.txt"), env)
            self.assertEqual(ctx.exception.env_var, "EDITOR")

    def test_reads_process_environment_by_default(self) -> None:
        with mock.patch.dict("os.environ", {"PAGER": "more"}):
            cmd = build_spawn_command(SpawnRequest("pager", "/srv/", "x"))

        self.assertEqual(cmd, ["more", "x"])


class RunProgramTests(unittest.TestCase):
    def test_runs_in_cwd_between_mode_switches(self) -> None:
        calls: list[str] = []

        def fake_run(cmd, cwd, check):
            calls.append(f"run:{cmd[0]}:{cwd}")
            return subprocess.CompletedProcess(cmd, 0)

        with mock.patch("rover.spawn.subprocess.run", side_effect=fake_run) as run:
            error = run_program(
                ["less", "a.txt"],
                "/srv/",
                disable_tui_mode=lambda: calls.append("disable"),
                enable_tui_mode=lambda: calls.append("enable"),
            )

        self.assertIsNone(error)
        self.assertEqual(calls, ["disable", "run:less:/srv/", "enable"])
        run.assert_called_once_with(["less", "a.txt"], cwd="/srv/", check=False)

    def test_nonzero_exit_is_not_an_error(self) -> None:
        with mock.patch(
            "rover.spawn.subprocess.run",
            return_value=subprocess.CompletedProcess(["false"], 1),
        ):
            error = run_program(["false"], "/", lambda: None, lambda: None)

        self.assertIsNone(error)

    def test_launch_failure_returns_message_and_restores_mode(self) -> None:
        enable = mock.Mock()

        with mock.patch("rover.spawn.subprocess.run", side_effect=FileNotFoundError(2, "No such file")):
            error = run_program(["nope"], "/", lambda: None, enable)

        self.assertIsNotNone(error)
        self.assertTrue(error.startswith("Failed to launch nope"))
        enable.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
