"""Terminal control helpers for the shell session.

Owns raw-mode lifecycle, alternate-screen switching, mouse reporting, and the
optional kitty keyboard-protocol mode that reports key release events.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import termios
import tty

logger = logging.getLogger(__name__)

_ENTER_ALT_SCREEN = b"\x1b[?1049h\x1b[?25l"
_LEAVE_ALT_SCREEN = b"\x1b[?25h\x1b[?1049l"
_MOUSE_ON = b"\x1b[?1000h\x1b[?1002h\x1b[?1006h"
_MOUSE_OFF = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l"
# Kitty keyboard protocol: push "disambiguate + report event types", then pop.
_KEY_EVENTS_ON = b"\x1b[>3u"
_KEY_EVENTS_OFF = b"\x1b[<u"


class TerminalController:
    """Manage terminal mode transitions for the full-screen UI."""

    def __init__(self, stdin_fd: int, stdout_fd: int, *, report_key_events: bool = False) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.report_key_events = report_key_events
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with mouse reporting enabled."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        payload = _ENTER_ALT_SCREEN + _MOUSE_ON
        if self.report_key_events:
            payload += _KEY_EVENTS_ON
        os.write(self.stdout_fd, payload)
        logger.debug("terminal entered tui mode")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and disable TUI mouse mode."""
        payload = _MOUSE_OFF + _LEAVE_ALT_SCREEN
        if self.report_key_events:
            payload = _KEY_EVENTS_OFF + payload
        try:
            os.write(self.stdout_fd, payload)
        finally:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        logger.debug("terminal restored")

    def size(self) -> tuple[int, int]:
        """Return ``(columns, lines)`` of the terminal, 80x24 when unknown."""
        term = shutil.get_terminal_size((80, 24))
        return max(1, term.columns), max(1, term.lines)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()
