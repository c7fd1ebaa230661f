"""Terminal control helpers for the dashboard session.

Owns the alternate-screen lifecycle and the two input modes: cbreak while the
hierarchy loads (Ctrl+C still raises ``KeyboardInterrupt``) and raw once the
dashboard accepts keys.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"
CURSOR_HOME = "\x1b[H"
CLEAR_TO_END = "\x1b[J"
CLEAR_SCREEN = "\x1b[2J"


class TerminalController:
    """Manage terminal mode transitions and full-frame writes."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enter_screen(self) -> None:
        """Switch to the alternate screen with echo and line buffering off."""
        tty.setcbreak(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SCREEN)

    def enable_raw_input(self) -> None:
        """Deliver every key, including Ctrl+C, as bytes on stdin."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)

    def restore(self) -> None:
        """Leave the alternate screen and restore the saved tty attributes."""
        os.write(self.stdout_fd, LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def draw(self, frame: str) -> None:
        """Replace the visible screen contents with ``frame``."""
        os.write(self.stdout_fd, f"{CURSOR_HOME}{frame}{CLEAR_TO_END}".encode("utf-8"))

    def clear(self) -> None:
        os.write(self.stdout_fd, f"{CLEAR_SCREEN}{CURSOR_HOME}".encode("ascii"))

    @contextlib.contextmanager
    def session(self):
        """Context manager that brackets code with screen enter/restore calls."""
        try:
            self.enter_screen()
            yield self
        finally:
            self.restore()
