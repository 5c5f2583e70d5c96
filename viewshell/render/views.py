"""Per-view renderers plus the tab and status bars shared by every view.

Each renderer receives the frame, the body area left after the chrome, the
state, and the render context. Renderers only read state, except for the list
scroll offset maintained by ``Frame.draw_list``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..ansi import display_width
from ..keymap import Command, Keymap, key_label
from ..state import AppState, View
from ..ui_theme import UITheme
from .frame import Frame, Rect

APP_TITLE = "viewshell"


@dataclass(frozen=True)
class RenderContext:
    theme: UITheme
    keymap: Keymap

    def keys(self, command: Command) -> str:
        keys = self.keymap.keys_for(command)
        return "/".join(key_label(key) for key in keys) if keys else "-"


ViewRenderer = Callable[[Frame, Rect, AppState, RenderContext], None]


def draw_tab_bar(frame: Frame, area: Rect, state: AppState, context: RenderContext) -> None:
    theme = context.theme
    frame.fill(area, theme.tab_inactive)
    col = area.x + 1
    for view in View:
        label = f" {view.position} {view.title} "
        style = theme.tab_active if view is state.view else theme.tab_inactive
        col += frame.set_string(col, area.y, label, style, area.x + area.width - col)
        col += 1
    title_w = display_width(APP_TITLE)
    if col + title_w + 1 < area.x + area.width:
        frame.set_string(area.x + area.width - title_w - 1, area.y, APP_TITLE, theme.title)


def selection_summary(state: AppState) -> str:
    item = state.items.selected_item()
    if item is None:
        return f"no selection ({len(state.items)} items)"
    return f"{item} ({state.items.selected + 1}/{len(state.items)})"


def draw_status_bar(frame: Frame, area: Rect, state: AppState, context: RenderContext) -> None:
    theme = context.theme
    frame.fill(area, theme.status)
    frame.set_string(area.x + 1, area.y, selection_summary(state), theme.status, max(0, area.width - 2))
    hint = f"{context.keys(Command.SHOW_HELP)} help  {context.keys(Command.QUIT)} quit"
    hint_w = display_width(hint)
    left_w = display_width(selection_summary(state)) + 2
    if left_w + hint_w + 2 <= area.width:
        frame.set_string(area.x + area.width - hint_w - 1, area.y, hint, theme.status)


def render_list_view(frame: Frame, area: Rect, state: AppState, context: RenderContext) -> None:
    theme = context.theme
    inner = frame.draw_box(
        area,
        f"Items ({len(state.items)})",
        border_style=theme.border,
        title_style=theme.title,
    )
    if not state.items.items:
        frame.draw_text(inner, ["(no items)"], theme.dim)
        return
    frame.draw_list(
        inner,
        state.items,
        style=theme.text,
        highlight_style=theme.highlight,
        highlight_symbol=theme.highlight_symbol,
    )


def details_lines(state: AppState, context: RenderContext) -> list[str]:
    item = state.items.selected_item()
    if item is None:
        return [
            "Nothing selected.",
            "",
            f"Press {context.keys(Command.NEXT)} to select an item.",
        ]
    return [
        f"Selected: {item}",
        f"Position: {state.items.selected + 1} of {len(state.items)}",
        "",
        f"{context.keys(Command.DESELECT)} clears the selection.",
    ]


def render_details_view(frame: Frame, area: Rect, state: AppState, context: RenderContext) -> None:
    theme = context.theme
    left, right = area.split_columns(40)
    render_list_view(frame, left, state, context)
    inner = frame.draw_box(right, "Details", border_style=theme.border, title_style=theme.title)
    frame.draw_text(inner.inner(), details_lines(state, context), theme.text)


def render_help_view(frame: Frame, area: Rect, state: AppState, context: RenderContext) -> None:
    theme = context.theme
    inner = frame.draw_box(area, "Help", border_style=theme.border, title_style=theme.title)
    rows = context.keymap.describe()
    key_w = max((display_width(keys) for keys, _ in rows), default=0) + 2
    lines: list = [[("Keys", theme.help_heading)], ""]
    for keys, description in rows:
        lines.append([(keys.ljust(key_w), theme.help_key), (description, theme.text)])
    frame.draw_text(inner.inner(), lines)
