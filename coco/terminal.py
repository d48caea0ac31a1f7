"""Terminal control for the selection session.

Owns the controlling tty, raw-mode lifecycle, and alternate-screen switching.
Standard input and output stay free for the dataset and the selected line.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

from .errors import InputReadError
from .events import Event
from .keys import KeyReader

TTY_PATH = "/dev/tty"
FALLBACK_SIZE = (80, 24)


class TerminalController:
    """Manage raw-mode transitions for one tty file descriptor."""

    def __init__(self, fd: int) -> None:
        """Capture tty state so it can be restored on exit."""
        self.fd = fd
        self._saved_tty_state = termios.tcgetattr(fd)
        self._active = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.fd, termios.TCSAFLUSH)
        self._active = True
        os.write(self.fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty state.

        No-op unless ``enable_tui_mode`` ran. The saved tty state is restored
        even when writing the exit sequence fails.
        """
        if not self._active:
            return
        self._active = False
        try:
            os.write(self.fd, b"\x1b[?25h\x1b[?1049l")
        finally:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved_tty_state)

    @property
    def active(self) -> bool:
        return self._active

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


class Terminal:
    """Terminal driver used by ``run_session``: events in, frames out."""

    def __init__(self, fd: int, owns_fd: bool = False) -> None:
        self.fd = fd
        self._owns_fd = owns_fd
        self.controller = TerminalController(fd)
        self.keys = KeyReader(fd)

    @classmethod
    def open(cls, path: str = TTY_PATH) -> Terminal:
        """Open the controlling terminal for reading keys and drawing."""
        try:
            fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
        except OSError as exc:
            raise InputReadError(f"cannot open terminal {path}: {exc.strerror or exc}") from exc
        try:
            return cls(fd, owns_fd=True)
        except termios.error as exc:
            os.close(fd)
            raise InputReadError(f"{path} is not a terminal") from exc

    def raw_mode(self):
        return self.controller.raw_mode()

    def poll_event(self) -> Event:
        return self.keys.read_event()

    def get_visible_size(self) -> tuple[int, int]:
        """Return ``(columns, rows)``, re-read on every call."""
        try:
            size = os.get_terminal_size(self.fd)
        except OSError:
            size = shutil.get_terminal_size(FALLBACK_SIZE)
        return max(0, size.columns), max(0, size.lines)

    def render(self, frame: str) -> None:
        os.write(self.fd, frame.encode("utf-8", errors="replace"))

    def close(self) -> None:
        if self._owns_fd:
            os.close(self.fd)
            self._owns_fd = False

    def __enter__(self) -> Terminal:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
