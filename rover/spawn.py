"""External program launch for shell, pager, and editor hand-offs.

Programs come from ``$SHELL``, ``$PAGER`` and ``$EDITOR``, read at the point
of use. The browser leaves raw/alternate-screen mode for the lifetime of the
child and resumes once it exits.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from collections.abc import Callable, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SPAWN_ENV_VARS: dict[str, str] = {
    "shell": "SHELL",
    "pager": "PAGER",
    "editor": "EDITOR",
}


class SpawnUnavailable(LookupError):
    """Raised when the environment names no program for a spawn request."""

    def __init__(self, kind: str, env_var: str) -> None:
        self.kind = kind
        self.env_var = env_var
        super().__init__(f"${env_var} is not set; cannot launch {kind}")


@dataclass(frozen=True)
class SpawnRequest:
    """Request to run one external program, optionally on one file."""

    kind: str
    cwd: str
    filename: str | None = None


def build_spawn_command(request: SpawnRequest, environ: Mapping[str, str] | None = None) -> list[str]:
    """Build a fresh argument list for ``request``.

    Raises ``SpawnUnavailable`` when the program variable is unset or blank.
    """
    env = os.environ if environ is None else environ
    env_var = SPAWN_ENV_VARS[request.kind]
    cmd = shlex.split(env.get(env_var, "").strip())
    if not cmd:
        raise SpawnUnavailable(request.kind, env_var)
    if request.filename is not None:
        cmd.append(request.filename)
    return cmd


def run_program(
    cmd: list[str],
    cwd: str,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> str | None:
    """Run ``cmd`` in the foreground and wait for it to exit.

    Returns an error message string instead of raising for UI-friendly
    handling.
    """
    logger.info("spawning %s in %s", cmd, cwd)
    disable_tui_mode()
    try:
        completed = subprocess.run(cmd, cwd=cwd, check=False)
    except OSError as exc:
        logger.error("failed to launch %s: %s", cmd[0], exc)
        return f"Failed to launch {cmd[0]}: {exc}"
    finally:
        enable_tui_mode()
    logger.debug("%s exited with status %s", cmd[0], completed.returncode)
    return None


__all__ = [
    "SPAWN_ENV_VARS",
    "SpawnRequest",
    "SpawnUnavailable",
    "build_spawn_command",
    "run_program",
]
