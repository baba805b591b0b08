"""Raw-mode and alternate-screen switching for the browser session.

Child programs (shell, pager, editor) need the cooked terminal back, so the
two halves are exposed separately as well as through ``raw_mode``.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_ALT_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_ALT_SCREEN = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Own the tty attributes captured at startup."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._cooked_attrs = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Switch stdin to raw input and draw on the alternate screen."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_ALT_SCREEN)

    def disable_tui_mode(self) -> None:
        """Return to the main screen with the startup tty attributes."""
        os.write(self.stdout_fd, LEAVE_ALT_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._cooked_attrs)

    @contextlib.contextmanager
    def raw_mode(self):
        self.enable_tui_mode()
        try:
            yield self
        finally:
            self.disable_tui_mode()
