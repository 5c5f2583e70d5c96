"""Runtime composition: terminal session, screen, and event loop wiring."""

from __future__ import annotations

import logging
import os
import sys

from ..errors import ShellError
from ..input import read_event
from ..keymap import Keymap
from ..render import Frame, RenderContext, Screen, render_view, validate_renderers
from ..state import AppState
from ..terminal import TerminalController
from ..ui_theme import UITheme
from .loop import LoopState, RuntimeLoopCallbacks, run_main_loop

logger = logging.getLogger(__name__)


def run_shell(
    state: AppState,
    *,
    theme: UITheme,
    keymap: Keymap,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
    report_key_events: bool = False,
) -> LoopState:
    """Run the interactive shell on the controlling terminal until quit.

    The terminal is restored on every exit path before any error propagates.
    """
    validate_renderers()
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd):
        raise ShellError("standard input is not a terminal")

    terminal = TerminalController(stdin_fd, stdout_fd, report_key_events=report_key_events)
    screen = Screen(stdout_fd, terminal.size)
    context = RenderContext(theme=theme, keymap=keymap)

    def draw(current: AppState) -> None:
        screen.draw(lambda frame: render_view(frame, current, context))

    callbacks = RuntimeLoopCallbacks(
        read_event=lambda: read_event(stdin_fd),
        draw=draw,
    )
    logger.info("starting shell: view=%s items=%d theme=%s", state.view.value, len(state.items), theme.name)
    with terminal.raw_mode():
        return run_main_loop(state, keymap, callbacks)


def render_snapshot(state: AppState, *, theme: UITheme, keymap: Keymap, columns: int, rows: int) -> str:
    """Render one frame of ``state`` as newline-separated styled rows."""
    validate_renderers()
    frame = Frame(columns, rows)
    render_view(frame, state, RenderContext(theme=theme, keymap=keymap))
    return "\n".join(frame.lines()) + "\n"
