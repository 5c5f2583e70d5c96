"""Cell-buffer frame and the drawing primitives renderers use.

A ``Frame`` is a width x height grid of cells (character + ANSI style). Views
draw into it; ``Screen.draw`` then serializes the whole grid in one write so
the terminal never shows a half-drawn frame.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from ..ansi import char_display_width, display_width
from ..state import StatefulList

RESET = "\033[0m"
SYNC_OUTPUT_BEGIN = "\033[?2026h"
SYNC_OUTPUT_END = "\033[?2026l"

Span = tuple[str, str]
Line = str | Sequence[Span]


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inner(self, margin: int = 1) -> Rect:
        return Rect(
            self.x + margin,
            self.y + margin,
            max(0, self.width - 2 * margin),
            max(0, self.height - 2 * margin),
        )

    def take_top(self, rows: int) -> tuple[Rect, Rect]:
        """Split off the first ``rows`` rows; returns ``(top, rest)``."""
        rows = max(0, min(rows, self.height))
        return (
            Rect(self.x, self.y, self.width, rows),
            Rect(self.x, self.y + rows, self.width, self.height - rows),
        )

    def take_bottom(self, rows: int) -> tuple[Rect, Rect]:
        """Split off the last ``rows`` rows; returns ``(rest, bottom)``."""
        rows = max(0, min(rows, self.height))
        return (
            Rect(self.x, self.y, self.width, self.height - rows),
            Rect(self.x, self.y + self.height - rows, self.width, rows),
        )

    def split_columns(self, left_percent: int) -> tuple[Rect, Rect]:
        left_w = max(0, min(self.width, self.width * left_percent // 100))
        return (
            Rect(self.x, self.y, left_w, self.height),
            Rect(self.x + left_w, self.y, self.width - left_w, self.height),
        )


class Frame:
    """Mutable drawing surface for one tick."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._chars = [[" "] * self.width for _ in range(self.height)]
        self._styles = [[""] * self.width for _ in range(self.height)]

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def cell(self, x: int, y: int) -> tuple[str, str]:
        return self._chars[y][x], self._styles[y][x]

    def set_string(self, x: int, y: int, text: str, style: str = "", max_width: int | None = None) -> int:
        """Write ``text`` starting at ``(x, y)``; return the columns consumed.

        Output is clipped to the frame edge and to ``max_width``. A wide
        character occupies two cells; the second holds an empty string. A wide
        character that is only partly overwritten is blanked.
        """
        if not (0 <= y < self.height) or not (0 <= x < self.width):
            return 0
        limit = self.width - x if max_width is None else min(max_width, self.width - x)
        row_chars = self._chars[y]
        row_styles = self._styles[y]
        col = 0
        for ch in text:
            if ch in "\r\n":
                ch = " "
            w = char_display_width(ch, col)
            if w == 0:
                if col > 0:
                    base = x + col - 1
                    if row_chars[base] == "":
                        base -= 1
                    row_chars[base] += ch
                continue
            if col + w > limit:
                break
            if col == 0 and x > 0 and row_chars[x] == "":
                row_chars[x - 1] = " "
            if ch == "\t":
                for offset in range(w):
                    row_chars[x + col + offset] = " "
                    row_styles[x + col + offset] = style
            else:
                row_chars[x + col] = ch
                row_styles[x + col] = style
                if w == 2:
                    row_chars[x + col + 1] = ""
                    row_styles[x + col + 1] = style
            col += w
        end = x + col
        if col and end < self.width and row_chars[end] == "":
            row_chars[end] = " "
        return col

    def set_spans(self, x: int, y: int, spans: Iterable[Span], max_width: int | None = None) -> int:
        col = 0
        for text, style in spans:
            remaining = None if max_width is None else max_width - col
            if remaining is not None and remaining <= 0:
                break
            col += self.set_string(x + col, y, text, style, remaining)
        return col

    def fill(self, rect: Rect, style: str = "", ch: str = " ") -> None:
        x0 = max(0, rect.x)
        x1 = min(self.width, rect.x + rect.width)
        if x0 >= x1:
            return
        for y in range(max(0, rect.y), min(self.height, rect.y + rect.height)):
            chars = self._chars[y]
            # Half-covered wide characters become plain blanks.
            if x0 > 0 and chars[x0] == "":
                chars[x0 - 1] = " "
            if x1 < self.width and chars[x1] == "":
                chars[x1] = " "
            for x in range(x0, x1):
                chars[x] = ch
                self._styles[y][x] = style

    def draw_text(self, rect: Rect, lines: Iterable[Line], style: str = "") -> None:
        """Draw a text block, one entry per row, clipped to ``rect``."""
        if rect.is_empty:
            return
        for row, line in enumerate(lines):
            if row >= rect.height:
                break
            if isinstance(line, str):
                self.set_string(rect.x, rect.y + row, line, style, rect.width)
            else:
                self.set_spans(rect.x, rect.y + row, line, rect.width)

    def draw_box(self, rect: Rect, title: str = "", *, border_style: str = "", title_style: str = "") -> Rect:
        """Draw a rounded border around ``rect`` and return the inner area."""
        if rect.width < 2 or rect.height < 2:
            return Rect(rect.x, rect.y, 0, 0)
        inner_w = rect.width - 2
        bottom = rect.y + rect.height - 1
        right = rect.x + rect.width - 1
        self.set_string(rect.x, rect.y, "╭" + "─" * inner_w + "╮", border_style)
        for y in range(rect.y + 1, bottom):
            self.set_string(rect.x, y, "│", border_style)
            self.set_string(right, y, "│", border_style)
        self.set_string(rect.x, bottom, "╰" + "─" * inner_w + "╯", border_style)
        if title and inner_w > 2:
            self.set_string(rect.x + 2, rect.y, f" {title} ", title_style, inner_w - 2)
        return rect.inner()

    def draw_list(
        self,
        rect: Rect,
        items: StatefulList,
        *,
        style: str = "",
        highlight_style: str = "",
        highlight_symbol: str = ">> ",
        label: Callable[[object], str] = str,
    ) -> None:
        """Draw ``items`` with the selected row highlighted.

        Updates ``items.offset`` so the selected row stays inside ``rect``.
        The selection itself is never changed.
        """
        if rect.is_empty:
            return
        count = len(items)
        offset = max(0, min(items.offset, max(0, count - rect.height)))
        selected = items.selected
        if selected is not None:
            if selected < offset:
                offset = selected
            elif selected >= offset + rect.height:
                offset = selected - rect.height + 1
        items.offset = offset

        gutter = " " * display_width(highlight_symbol)
        for row in range(rect.height):
            idx = offset + row
            if idx >= count:
                break
            y = rect.y + row
            text = label(items.items[idx])
            if idx == selected:
                self.fill(Rect(rect.x, y, rect.width, 1), highlight_style)
                self.set_string(rect.x, y, highlight_symbol + text, highlight_style, rect.width)
            else:
                self.set_string(rect.x, y, gutter + text, style, rect.width)

    def lines(self) -> list[str]:
        """Serialize each row to a string with inline ANSI styling."""
        out: list[str] = []
        for chars, styles in zip(self._chars, self._styles):
            parts: list[str] = []
            current = ""
            for ch, style in zip(chars, styles):
                if ch == "":
                    continue
                if style != current:
                    if current:
                        parts.append(RESET)
                    if style:
                        parts.append(style)
                    current = style
                parts.append(ch)
            if current:
                parts.append(RESET)
            out.append("".join(parts))
        return out

    def render(self) -> str:
        """Serialize the frame as absolute-positioned rows."""
        return "".join(f"\033[{row + 1};1H{line}" for row, line in enumerate(self.lines()))


class Screen:
    """Frame factory and committer bound to one output descriptor."""

    def __init__(self, stdout_fd: int, size: Callable[[], tuple[int, int]]) -> None:
        self.stdout_fd = stdout_fd
        self._size = size

    def draw(self, callback: Callable[[Frame], None]) -> Frame:
        """Build a frame sized to the terminal, let ``callback`` fill it, and commit it."""
        columns, lines = self._size()
        frame = Frame(columns, lines)
        callback(frame)
        payload = (SYNC_OUTPUT_BEGIN + frame.render() + SYNC_OUTPUT_END).encode("utf-8", errors="replace")
        view = memoryview(payload)
        while view:
            written = os.write(self.stdout_fd, view)
            view = view[written:]
        return frame
