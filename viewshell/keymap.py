"""Key-token to command bindings.

Keys arrive as normalized tokens from ``viewshell.input`` (``"j"``, ``"DOWN"``,
``"CTRL_C"``). A ``Keymap`` turns a token into an abstract ``Command`` so the
event loop never deals with a particular keyboard layout.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from .state import View


class Command(Enum):
    QUIT = "quit"
    DESELECT = "deselect"
    NEXT = "next"
    PREVIOUS = "previous"
    FIRST = "first"
    LAST = "last"
    SHOW_LIST = "show_list"
    SHOW_DETAILS = "show_details"
    SHOW_HELP = "show_help"
    NEXT_VIEW = "next_view"
    PREVIOUS_VIEW = "previous_view"

    @classmethod
    def from_name(cls, name: str) -> Command:
        return cls(str(name).strip().lower())


VIEW_COMMANDS: dict[Command, View] = {
    Command.SHOW_LIST: View.LIST,
    Command.SHOW_DETAILS: View.DETAILS,
    Command.SHOW_HELP: View.HELP,
}

COMMAND_DESCRIPTIONS: dict[Command, str] = {
    Command.QUIT: "quit",
    Command.DESELECT: "clear selection",
    Command.NEXT: "select next item",
    Command.PREVIOUS: "select previous item",
    Command.FIRST: "select first item",
    Command.LAST: "select last item",
    Command.SHOW_LIST: "list view",
    Command.SHOW_DETAILS: "details view",
    Command.SHOW_HELP: "help view",
    Command.NEXT_VIEW: "next view",
    Command.PREVIOUS_VIEW: "previous view",
}


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single command."""

    combos: tuple[str, ...]
    command: Command


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("q", "CTRL_C"), Command.QUIT),
    KeyBinding(("LEFT", "h"), Command.DESELECT),
    KeyBinding(("DOWN", "j"), Command.NEXT),
    KeyBinding(("UP", "k"), Command.PREVIOUS),
    KeyBinding(("HOME", "g"), Command.FIRST),
    KeyBinding(("END", "G"), Command.LAST),
    KeyBinding(("1",), Command.SHOW_LIST),
    KeyBinding(("2",), Command.SHOW_DETAILS),
    KeyBinding(("3",), Command.SHOW_HELP),
    KeyBinding(("TAB",), Command.NEXT_VIEW),
    KeyBinding(("SHIFT_TAB",), Command.PREVIOUS_VIEW),
)

_KEY_LABELS = {
    "UP": "Up",
    "DOWN": "Down",
    "LEFT": "Left",
    "RIGHT": "Right",
    "HOME": "Home",
    "END": "End",
    "TAB": "Tab",
    "SHIFT_TAB": "Shift+Tab",
    "ENTER": "Enter",
    "ESC": "Esc",
    "BACKSPACE": "Backspace",
    "PAGE_UP": "PgUp",
    "PAGE_DOWN": "PgDn",
}


def key_label(token: str) -> str:
    """Human-readable label for a key token (``CTRL_C`` -> ``Ctrl+C``)."""
    if token in _KEY_LABELS:
        return _KEY_LABELS[token]
    if token.startswith("CTRL_") and len(token) > 5:
        return "Ctrl+" + token[5:].capitalize()
    return token


class Keymap:
    """Small key-dispatch table from key tokens to commands."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    @classmethod
    def default(cls) -> Keymap:
        return cls().register_bindings(*DEFAULT_BINDINGS)

    @classmethod
    def with_overrides(cls, overrides: Mapping[Command, Iterable[str]]) -> Keymap:
        """Default bindings, with each overridden command's keys replaced entirely."""
        keymap = cls()
        for binding in DEFAULT_BINDINGS:
            if binding.command not in overrides:
                keymap.register_binding(binding)
        for command, combos in overrides.items():
            keymap.register_binding(KeyBinding(tuple(combos), command))
        return keymap

    def register_binding(self, binding: KeyBinding) -> Keymap:
        """Register one binding, overwriting existing commands for same combos."""
        for combo in binding.combos:
            self._commands[combo] = binding.command
        return self

    def register_bindings(self, *bindings: KeyBinding) -> Keymap:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def resolve(self, key: str) -> Command | None:
        return self._commands.get(key)

    def keys_for(self, command: Command) -> tuple[str, ...]:
        return tuple(key for key, bound in self._commands.items() if bound is command)

    def describe(self) -> list[tuple[str, str]]:
        """Return ``(keys, description)`` rows in command declaration order."""
        rows: list[tuple[str, str]] = []
        for command in Command:
            keys = self.keys_for(command)
            if keys:
                rows.append(("/".join(key_label(key) for key in keys), COMMAND_DESCRIPTIONS[command]))
        return rows
