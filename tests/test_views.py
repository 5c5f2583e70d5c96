"""Content of the list, details, and help views and the shared chrome."""

from __future__ import annotations

import unittest

from viewshell.keymap import Command, Keymap
from viewshell.render import Frame, RenderContext, render_view
from viewshell.render.frame import RESET
from viewshell.render.views import details_lines, selection_summary
from viewshell.state import AppState, View
from viewshell.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _render(state: AppState, width: int = 60, height: int = 14, keymap: Keymap | None = None) -> list[str]:
    frame = Frame(width, height)
    render_view(frame, state, RenderContext(theme=PLAIN_THEME, keymap=keymap or Keymap.default()))
    return frame.lines()


class ChromeTests(unittest.TestCase):
    def test_tab_bar_lists_every_view_with_its_number(self) -> None:
        top = _render(AppState.new())[0]
        self.assertIn("1 List", top)
        self.assertIn("2 Details", top)
        self.assertIn("3 Help", top)
        self.assertIn("viewshell", top)

    def test_active_tab_uses_active_style(self) -> None:
        frame = Frame(60, 6)
        state = AppState.new(view=View.DETAILS)
        render_view(frame, state, RenderContext(theme=DEFAULT_THEME, keymap=Keymap.default()))
        top = frame.lines()[0]
        self.assertIn(DEFAULT_THEME.tab_active + " 2 Details ", top)

    def test_styled_rows_close_with_reset_and_plain_rows_carry_no_escapes(self) -> None:
        for view in View:
            state = AppState.new(view=view)
            styled = Frame(60, 8)
            render_view(styled, state, RenderContext(theme=DEFAULT_THEME, keymap=Keymap.default()))
            self.assertTrue(styled.lines()[0].endswith(RESET))
            for row in _render(state, height=8):
                self.assertNotIn("\033", row)

    def test_status_bar_shows_selection_and_hints(self) -> None:
        state = AppState.new(["a", "b", "c"])
        self.assertIn("no selection (3 items)", _render(state)[-1])
        state.items.next()
        state.items.next()
        bottom = _render(state)[-1]
        self.assertIn("b (2/3)", bottom)
        self.assertIn("3 help", bottom)
        self.assertIn("q/Ctrl+C quit", bottom)

    def test_selection_summary(self) -> None:
        state = AppState.new(["only"])
        self.assertEqual(selection_summary(state), "no selection (1 items)")
        state.items.next()
        self.assertEqual(selection_summary(state), "only (1/1)")


class ListViewTests(unittest.TestCase):
    def test_list_view_shows_items_and_highlight(self) -> None:
        state = AppState.new(["Item0", "Item1", "Item2"])
        state.items.next()
        rows = _render(state)
        body = "\n".join(rows)
        self.assertIn("Items (3)", rows[1])
        self.assertIn("> Item0", body)
        self.assertIn("  Item1", body)

    def test_empty_list_view_renders_placeholder(self) -> None:
        rows = _render(AppState.new([]))
        self.assertTrue(any("(no items)" in row for row in rows))

    def test_selection_survives_render_and_view_switch(self) -> None:
        state = AppState.new(["a", "b", "c"])
        state.items.last()
        _render(state)
        state.switch_view(View.HELP)
        _render(state)
        state.switch_view(View.LIST)
        self.assertEqual(state.items.selected, 2)
        self.assertIn("> c", "\n".join(_render(state)))

    def test_tiny_frame_does_not_raise(self) -> None:
        for width, height in ((1, 1), (2, 2), (5, 3), (12, 4)):
            for view in View:
                _render(AppState.new(view=view), width, height)


class DetailsViewTests(unittest.TestCase):
    def test_details_without_selection_explains_how_to_select(self) -> None:
        context = RenderContext(theme=PLAIN_THEME, keymap=Keymap.default())
        lines = details_lines(AppState.new(), context)
        self.assertEqual(lines[0], "Nothing selected.")
        self.assertIn("Down/j", lines[2])

    def test_details_shows_selected_item_and_position(self) -> None:
        state = AppState.new(["Item0", "Item1", "Item2"], View.DETAILS)
        state.items.previous()
        state.items.previous()
        body = "\n".join(_render(state, width=80))
        self.assertIn("Selected: Item2", body)
        self.assertIn("Position: 3 of 3", body)
        self.assertIn("Details", body)
        self.assertIn("> Item2", body)


class HelpViewTests(unittest.TestCase):
    def test_help_lists_bindings(self) -> None:
        body = "\n".join(_render(AppState.new(view=View.HELP), height=20))
        self.assertIn("Keys", body)
        self.assertIn("q/Ctrl+C", body)
        self.assertIn("quit", body)
        self.assertIn("Down/j", body)
        self.assertIn("select next item", body)

    def test_help_reflects_custom_bindings(self) -> None:
        keymap = Keymap.with_overrides({Command.QUIT: ("x",)})
        body = "\n".join(_render(AppState.new(view=View.HELP), height=20, keymap=keymap))
        self.assertIn("x   ", body)
        self.assertNotIn("Ctrl+C", body)


if __name__ == "__main__":
    unittest.main()
