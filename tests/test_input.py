"""Regression tests for raw input decoding.

Covers ESC timing, arrow/modifier sequences, control-key tokens, SGR mouse
reports, and kitty keyboard-protocol press/repeat/release kinds.
"""

from __future__ import annotations

import os
import time
import unittest

from viewshell import input as input_mod
from viewshell.input import KeyEvent, KeyEventKind, MouseEvent, OtherEvent


class ReadEventTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_event(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def _read_one(self, payload: bytes):
        return self._read_all(payload, 1)[0]

    def test_printable_key(self) -> None:
        self.assertEqual(self._read_one(b"j"), KeyEvent("j"))

    def test_multibyte_utf8_key(self) -> None:
        self.assertEqual(self._read_one("é".encode("utf-8")), KeyEvent("é"))

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            event = input_mod.read_event(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(event, KeyEvent("ESC"))
        self.assertLess(elapsed, 0.2)

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        first, second = self._read_all(b"\x1bq", 2)
        self.assertEqual(first, KeyEvent("ESC"))
        self.assertEqual(second, KeyEvent("q"))

    def test_timeout_returns_none(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            self.assertIsNone(input_mod.read_event(read_fd, timeout_ms=10))
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_closed_input_raises_eof(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            with self.assertRaises(EOFError):
                input_mod.read_event(read_fd)
        finally:
            os.close(read_fd)

    def test_arrow_sequences(self) -> None:
        events = self._read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1bOA", 5)
        self.assertEqual([event.code for event in events], ["UP", "DOWN", "RIGHT", "LEFT", "UP"])

    def test_control_bytes(self) -> None:
        events = self._read_all(b"\x03\t\r\x7f\x0b", 5)
        self.assertEqual(
            [event.code for event in events],
            ["CTRL_C", "TAB", "ENTER", "BACKSPACE", "CTRL_K"],
        )

    def test_modified_arrow_and_tilde_keys(self) -> None:
        events = self._read_all(b"\x1b[1;3D\x1b[1;2A\x1b[5~\x1b[4~\x1b[Z", 5)
        self.assertEqual(
            [event.code for event in events],
            ["ALT_LEFT", "SHIFT_UP", "PAGE_UP", "END", "SHIFT_TAB"],
        )

    def test_sgr_mouse_events_are_not_key_events(self) -> None:
        press, release, wheel = self._read_all(b"\x1b[<0;12;5M\x1b[<0;12;5m\x1b[<65;3;4M", 3)
        self.assertEqual(press, MouseEvent("PRESS", 0, 12, 5))
        self.assertEqual(release, MouseEvent("RELEASE", 0, 12, 5))
        self.assertEqual(wheel, MouseEvent("WHEEL_DOWN", 1, 3, 4))

    def test_unknown_sequence_is_reported_as_other_event(self) -> None:
        self.assertEqual(self._read_one(b"\x1b[99x"), OtherEvent("\x1b[99x"))

    def test_out_of_range_kitty_code_point_does_not_end_input(self) -> None:
        bad, key = self._read_all(b"\x1b[97:99999999;2uj", 2)
        self.assertEqual(bad, OtherEvent("\x1b[97:99999999;2u"))
        self.assertEqual(key, KeyEvent("j"))


class DecodeCsiTests(unittest.TestCase):
    def test_kitty_press_repeat_release_kinds(self) -> None:
        self.assertEqual(input_mod.decode_csi("106;1:1", "u"), KeyEvent("j", KeyEventKind.PRESS))
        self.assertEqual(input_mod.decode_csi("106;1:2", "u"), KeyEvent("j", KeyEventKind.REPEAT))
        self.assertEqual(input_mod.decode_csi("106;1:3", "u"), KeyEvent("j", KeyEventKind.RELEASE))
        self.assertEqual(input_mod.decode_csi("106", "u"), KeyEvent("j"))

    def test_kitty_arrow_release(self) -> None:
        self.assertEqual(input_mod.decode_csi("1;1:3", "B"), KeyEvent("DOWN", KeyEventKind.RELEASE))

    def test_kitty_modifiers_and_functional_keys(self) -> None:
        self.assertEqual(input_mod.decode_csi("99;5", "u"), KeyEvent("CTRL_C"))
        self.assertEqual(input_mod.decode_csi("103;2", "u"), KeyEvent("G"))
        self.assertEqual(input_mod.decode_csi("49:33;2", "u"), KeyEvent("!"))
        self.assertEqual(input_mod.decode_csi("27", "u"), KeyEvent("ESC"))
        self.assertEqual(input_mod.decode_csi("9;2", "u"), KeyEvent("SHIFT_TAB"))
        self.assertEqual(input_mod.decode_csi("13;1:3", "u"), KeyEvent("ENTER", KeyEventKind.RELEASE))

    def test_malformed_kitty_key_is_other_event(self) -> None:
        self.assertEqual(input_mod.decode_csi("abc", "u"), OtherEvent("\x1b[abcu"))

    def test_kitty_code_points_outside_unicode_are_other_events(self) -> None:
        huge = "9" * 30
        self.assertEqual(input_mod.decode_csi(huge, "u"), OtherEvent("\x1b[" + huge + "u"))
        self.assertEqual(input_mod.decode_csi("1114112", "u"), OtherEvent("\x1b[1114112u"))
        self.assertEqual(input_mod.decode_csi("97:1114112;2", "u"), OtherEvent("\x1b[97:1114112;2u"))
        self.assertEqual(input_mod.decode_csi("97:" + huge + ";2", "u"), OtherEvent("\x1b[97:" + huge + ";2u"))


if __name__ == "__main__":
    unittest.main()
