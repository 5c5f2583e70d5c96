"""Main interactive event loop for the shell.

Blocks for one input event at a time, maps key presses to commands, mutates
``AppState``, and redraws once per accepted command. Reading input and drawing
frames are injected so the loop can be driven without a terminal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..input import InputEvent, KeyEvent, KeyEventKind
from ..keymap import VIEW_COMMANDS, Command, Keymap
from ..state import AppState, StatefulList

logger = logging.getLogger(__name__)


class LoopState(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class EventOutcome(Enum):
    IGNORED = "ignored"
    UPDATED = "updated"
    QUIT = "quit"


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected capabilities used by ``run_main_loop``.

    ``read_event`` blocks for the next input event. ``draw`` renders and
    commits one frame for the given state. Errors from either propagate.
    """

    read_event: Callable[[], InputEvent | None]
    draw: Callable[[AppState], None]


_LIST_COMMANDS: dict[Command, Callable[[StatefulList], None]] = {
    Command.DESELECT: StatefulList.unselect,
    Command.NEXT: StatefulList.next,
    Command.PREVIOUS: StatefulList.previous,
    Command.FIRST: StatefulList.first,
    Command.LAST: StatefulList.last,
}

_VIEW_STEPS: dict[Command, int] = {
    Command.NEXT_VIEW: 1,
    Command.PREVIOUS_VIEW: -1,
}


def apply_command(state: AppState, command: Command) -> None:
    """Apply a non-quit command to ``state``."""
    list_op = _LIST_COMMANDS.get(command)
    if list_op is not None:
        list_op(state.items)
        logger.debug("%s -> selected=%r", command.value, state.items.selected)
        return
    view = VIEW_COMMANDS.get(command)
    if view is not None:
        state.switch_view(view)
        return
    step = _VIEW_STEPS.get(command)
    if step is not None:
        state.cycle_view(step)
        return
    raise ValueError(f"command {command!r} does not mutate state")


def handle_event(state: AppState, event: InputEvent | None, keymap: Keymap) -> EventOutcome:
    """Translate one input event into a state change or a quit request."""
    if not isinstance(event, KeyEvent) or event.kind is not KeyEventKind.PRESS:
        return EventOutcome.IGNORED
    command = keymap.resolve(event.code)
    if command is None:
        return EventOutcome.IGNORED
    if command is Command.QUIT:
        return EventOutcome.QUIT
    apply_command(state, command)
    return EventOutcome.UPDATED


def run_main_loop(state: AppState, keymap: Keymap, callbacks: RuntimeLoopCallbacks) -> LoopState:
    """Run until a quit command arrives; return ``LoopState.TERMINATED``.

    Draws one frame up front, then one frame after every accepted command.
    Ignored events never trigger a redraw.
    """
    callbacks.draw(state)
    while True:
        event = callbacks.read_event()
        outcome = handle_event(state, event, keymap)
        if outcome is EventOutcome.QUIT:
            logger.info("quit requested in %s view", state.view.value)
            return LoopState.TERMINATED
        if outcome is EventOutcome.UPDATED:
            callbacks.draw(state)
