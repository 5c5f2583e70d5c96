"""Tests for terminal mode control sequences.

Verifies raw-mode lifecycle safety and expected escape-command payloads.
These guard the terminal-session contract the runtime depends on.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from viewshell.terminal import TerminalController

ENTER = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1002h\x1b[?1006h"
LEAVE = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l\x1b[?25h\x1b[?1049l"


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("viewshell.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "viewshell.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("viewshell.terminal.os.write") as write_mock, mock.patch(
            "viewshell.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, ENTER))
        self.assertEqual(write_mock.call_args_list[1].args, (1, LEAVE))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_key_event_reporting_is_pushed_and_popped(self) -> None:
        with mock.patch("viewshell.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "viewshell.terminal.tty.setraw"
        ), mock.patch("viewshell.terminal.os.write") as write_mock, mock.patch(
            "viewshell.terminal.termios.tcsetattr"
        ):
            controller = TerminalController(stdin_fd=0, stdout_fd=1, report_key_events=True)
            with controller.raw_mode():
                pass

        self.assertEqual(write_mock.call_args_list[0].args, (1, ENTER + b"\x1b[>3u"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[<u" + LEAVE))

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("viewshell.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_tty_state_is_restored_even_if_leave_sequence_write_fails(self) -> None:
        with mock.patch("viewshell.terminal.termios.tcgetattr", return_value=[7]), mock.patch(
            "viewshell.terminal.os.write", side_effect=OSError("gone")
        ), mock.patch("viewshell.terminal.termios.tcsetattr") as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            with self.assertRaises(OSError):
                controller.disable_tui_mode()

        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, [7])

    def test_size_falls_back_and_never_reports_zero(self) -> None:
        with mock.patch("viewshell.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch(
            "viewshell.terminal.shutil.get_terminal_size",
            return_value=mock.Mock(columns=0, lines=30),
        ):
            self.assertEqual(controller.size(), (1, 30))


if __name__ == "__main__":
    unittest.main()
