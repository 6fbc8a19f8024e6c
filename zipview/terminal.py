"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, alternate-screen switching, and cursor visibility.
``raw_mode`` is the single scoped session every screen runs inside: whatever
way the session ends, the saved tty state and a visible cursor come back.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import signal
import sys
import termios
import tty

ENTER_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
LEAVE_SEQUENCE = b"\x1b[?25h\x1b[?1049l"
SHOW_CURSOR = b"\x1b[?25h"
RESTORED_SIGNALS: tuple[int, ...] = tuple(
    sig for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if sig is not None
)


def open_input_fd() -> tuple[int, bool]:
    """Return a key-input fd and whether the caller owns (must close) it.

    Tools that consume stdin for their data still need a keyboard, so when
    stdin is not a TTY the controlling terminal is opened directly.
    """
    stdin_fd = sys.stdin.fileno()
    if os.isatty(stdin_fd):
        return stdin_fd, False
    return os.open("/dev/tty", os.O_RDONLY), True


def terminal_size() -> tuple[int, int]:
    """Return ``(columns, lines)`` with a conventional 80x24 fallback."""
    size = shutil.get_terminal_size((80, 24))
    return max(1, size.columns), max(1, size.lines)


def _exit_on_signal(signum: int, _frame: object) -> None:
    raise SystemExit(128 + signum)


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SEQUENCE)
        self._active = True

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and show the cursor."""
        os.write(self.stdout_fd, LEAVE_SEQUENCE)
        self._active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write(self, frame: str) -> None:
        os.write(self.stdout_fd, frame.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        """Bracket code with TUI enter/exit, restoring on every exit path."""
        previous_handlers = {}
        for sig in RESTORED_SIGNALS:
            previous_handlers[sig] = signal.signal(sig, _exit_on_signal)
        try:
            self.enable_tui_mode()
            yield self
        finally:
            try:
                self.disable_tui_mode()
            finally:
                for sig, handler in previous_handlers.items():
                    signal.signal(sig, handler)

    @contextlib.contextmanager
    def suspended(self):
        """Hand the terminal to a child process, then take it back."""
        was_active = self._active
        if was_active:
            self.disable_tui_mode()
        try:
            yield
        finally:
            if was_active:
                self.enable_tui_mode()
