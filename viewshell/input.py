"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into input events: key events
carrying a normalized key token (``"j"``, ``"DOWN"``, ``"CTRL_C"``), SGR mouse
events, and an opaque event for anything else. Handles ESC-sequence timing,
modifier combos, and the kitty keyboard protocol's press/repeat/release kinds.
"""

from __future__ import annotations

import os
import select
from dataclasses import dataclass
from enum import Enum

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_MOD_SHIFT = 0b001
_MOD_ALT = 0b010
_MOD_CTRL = 0b100


class KeyEventKind(Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    code: str
    kind: KeyEventKind = KeyEventKind.PRESS


@dataclass(frozen=True)
class MouseEvent:
    action: str
    button: int
    col: int
    row: int


@dataclass(frozen=True)
class OtherEvent:
    """Bytes that decoded to nothing the shell understands."""

    raw: str


InputEvent = KeyEvent | MouseEvent | OtherEvent

_SINGLE_BYTE_KEYS = {
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
}

_CSI_FINAL_KEYS = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}

_TILDE_KEYS = {
    "1": "HOME",
    "2": "INSERT",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}

_KITTY_FUNCTIONAL_KEYS = {
    9: "TAB",
    13: "ENTER",
    27: "ESC",
    127: "BACKSPACE",
}

_KITTY_EVENT_KINDS = {
    "1": KeyEventKind.PRESS,
    "2": KeyEventKind.REPEAT,
    "3": KeyEventKind.RELEASE,
}


def _read_byte(fd: int) -> bytes:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ch = os.read(fd, 1)
    if not ch:
        raise EOFError("terminal input closed")
    return ch


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_event(fd: int, timeout_ms: int | None = None) -> InputEvent | None:
    """Block until one input event can be decoded from ``fd``.

    Returns ``None`` only when ``timeout_ms`` is given and expires first.
    Raises ``EOFError`` when the input stream is closed.
    """
    if not _PENDING_BYTES and timeout_ms is not None:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None

    ch = _read_byte(fd)
    if ch == b"\x1b":
        return _read_escape(fd)
    if ch in _SINGLE_BYTE_KEYS:
        return KeyEvent(_SINGLE_BYTE_KEYS[ch])

    code = ch[0]
    if code < 0x20:
        if 1 <= code <= 26:
            return KeyEvent(f"CTRL_{chr(code + 64)}")
        return OtherEvent(ch.decode("ascii"))
    if code >= 0x80:
        ch += _read_utf8_continuation(fd, code)
    return KeyEvent(ch.decode("utf-8", errors="replace"))


def _read_utf8_continuation(fd: int, lead: int) -> bytes:
    if 0xC0 <= lead < 0xE0:
        remaining = 1
    elif 0xE0 <= lead < 0xF0:
        remaining = 2
    elif 0xF0 <= lead < 0xF8:
        remaining = 3
    else:
        return b""
    out = b""
    for _ in range(remaining):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        out += part
    return out


def _read_escape(fd: int) -> InputEvent:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KeyEvent("ESC")
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return KeyEvent("ALT_O")
        key = _CSI_FINAL_KEYS.get(final.decode("ascii", errors="replace"))
        if key is None:
            return OtherEvent("\x1bO" + final.decode("ascii", errors="replace"))
        return KeyEvent(key)
    # Not a sequence introducer: report ESC and replay the byte as its own key.
    _PENDING_BYTES.append(seq)
    return KeyEvent("ESC")


def _read_csi(fd: int) -> InputEvent:
    body = bytearray()
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return OtherEvent("\x1b[" + body.decode("ascii", errors="replace"))
        if 0x40 <= part[0] <= 0x7E:
            final = chr(part[0])
            break
        body += part
        if len(body) > 64:
            return OtherEvent("\x1b[" + body.decode("ascii", errors="replace"))
    return decode_csi(body.decode("ascii", errors="replace"), final)


def _modifiers(field: str) -> int:
    try:
        return max(0, int(field.split(":")[0]) - 1)
    except ValueError:
        return 0


def _event_kind(field: str) -> KeyEventKind:
    parts = field.split(":")
    if len(parts) < 2:
        return KeyEventKind.PRESS
    return _KITTY_EVENT_KINDS.get(parts[1], KeyEventKind.PRESS)


def _with_modifiers(token: str, mods: int) -> str:
    prefix = ""
    if mods & _MOD_CTRL:
        prefix += "CTRL_"
    if mods & _MOD_ALT:
        prefix += "ALT_"
    if mods & _MOD_SHIFT:
        prefix += "SHIFT_"
    return prefix + token


def decode_csi(params: str, final: str) -> InputEvent:
    """Decode the parameter string and final byte of one ``ESC [`` sequence."""
    if params.startswith("<") and final in {"M", "m"}:
        return _decode_sgr_mouse(params[1:], pressed=final == "M")

    fields = params.split(";") if params else []
    mods = _modifiers(fields[1]) if len(fields) > 1 else 0
    kind = _event_kind(fields[1]) if len(fields) > 1 else KeyEventKind.PRESS

    if final in _CSI_FINAL_KEYS:
        return KeyEvent(_with_modifiers(_CSI_FINAL_KEYS[final], mods), kind)
    if final == "Z":
        return KeyEvent("SHIFT_TAB", kind)
    if final == "~" and fields:
        key = _TILDE_KEYS.get(fields[0].split(":")[0])
        if key is not None:
            return KeyEvent(_with_modifiers(key, mods), kind)
    if final == "u" and fields:
        event = _decode_kitty_key(fields[0], mods, kind)
        if event is not None:
            return event
    return OtherEvent("\x1b[" + params + final)


def _decode_kitty_key(key_field: str, mods: int, kind: KeyEventKind) -> KeyEvent | None:
    # CSI code[:shifted[:base]] ; mods[:event] u
    codes = key_field.split(":")
    try:
        code = int(codes[0])
        shifted = int(codes[1]) if len(codes) > 1 and codes[1] else None
    except ValueError:
        return None

    token = _KITTY_FUNCTIONAL_KEYS.get(code)
    if token is not None:
        if token == "TAB" and mods & _MOD_SHIFT:
            return KeyEvent("SHIFT_TAB", kind)
        return KeyEvent(_with_modifiers(token, mods), kind)

    try:
        ch = chr(code)
        shifted_ch = chr(shifted) if shifted is not None else None
    except (ValueError, OverflowError):
        return None
    if mods & _MOD_CTRL and ch.isalpha():
        return KeyEvent(f"CTRL_{ch.upper()}", kind)
    if mods & _MOD_SHIFT:
        ch = shifted_ch if shifted_ch is not None else ch.upper()
    if mods & _MOD_ALT:
        return KeyEvent(f"ALT_{ch}", kind)
    return KeyEvent(ch, kind)


def _decode_sgr_mouse(payload: str, *, pressed: bool) -> InputEvent:
    # SGR mouse: ESC [ < btn ; col ; row (M/m)
    try:
        btn_s, col_s, row_s = payload.split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return OtherEvent("\x1b[<" + payload)
    button = btn & 0b11
    if btn & 0b0100_0000:
        direction = ("UP", "DOWN", "LEFT", "RIGHT")[button]
        return MouseEvent(f"WHEEL_{direction}", button, col, row)
    if btn & 0b0010_0000:
        return MouseEvent("DRAG", button, col, row)
    return MouseEvent("PRESS" if pressed else "RELEASE", button, col, row)


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "InputEvent",
    "KeyEvent",
    "KeyEventKind",
    "MouseEvent",
    "OtherEvent",
    "decode_csi",
    "read_event",
]
