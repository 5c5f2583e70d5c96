"""In-memory shell state: the active view and the navigable item list.

``AppState`` is owned by the event loop. Renderers receive it for a single
frame and may only touch ``StatefulList.offset`` while drawing.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_ITEMS: tuple[str, ...] = tuple(f"Item{i}" for i in range(10))


class View(Enum):
    """Closed set of screens the shell can show."""

    LIST = "list"
    DETAILS = "details"
    HELP = "help"

    @property
    def title(self) -> str:
        return self.value.capitalize()

    @property
    def position(self) -> int:
        """1-based position used by number-key switching and the tab bar."""
        return list(View).index(self) + 1

    @classmethod
    def from_name(cls, name: str) -> View:
        """Look up a view by its case-insensitive value; raise ``ValueError`` if unknown."""
        return cls(str(name).strip().lower())


class StatefulList(Generic[T]):
    """Ordered items plus an optional selection cursor with wraparound.

    ``selected`` is either ``None`` or a valid index into ``items``. ``offset``
    is the first visible row and belongs to the list renderer.
    """

    def __init__(self, items: list[T]) -> None:
        self.items = items
        self.selected: int | None = None
        self.offset = 0

    @classmethod
    def with_items(cls, items: Sequence[T]) -> StatefulList[T]:
        if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
            raise TypeError(f"items must be a sequence of items, got {type(items).__name__}")
        return cls(list(items))

    def __len__(self) -> int:
        return len(self.items)

    def next(self) -> None:
        if not self.items:
            return
        if self.selected is None or self.selected >= len(self.items) - 1:
            self.selected = 0
        else:
            self.selected += 1

    def previous(self) -> None:
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected == 0:
            self.selected = len(self.items) - 1
        else:
            self.selected -= 1

    def first(self) -> None:
        if self.items:
            self.selected = 0

    def last(self) -> None:
        if self.items:
            self.selected = len(self.items) - 1

    def unselect(self) -> None:
        self.selected = None

    def selected_item(self) -> T | None:
        if self.selected is None:
            return None
        return self.items[self.selected]

    def __repr__(self) -> str:
        return f"StatefulList(items={self.items!r}, selected={self.selected!r})"


@dataclass
class AppState:
    view: View = View.LIST
    items: StatefulList[str] = field(default_factory=lambda: StatefulList.with_items(DEFAULT_ITEMS))

    @classmethod
    def new(cls, items: Sequence[str] = DEFAULT_ITEMS, view: View = View.LIST) -> AppState:
        """Build the initial state with ``view`` active and nothing selected."""
        state = cls(items=StatefulList.with_items(items))
        state.switch_view(view)
        return state

    def switch_view(self, view: View) -> None:
        """Make ``view`` active. The list selection is left untouched."""
        if not isinstance(view, View):
            raise TypeError(f"expected a View, got {view!r}")
        if view is not self.view:
            logger.debug("switching view %s -> %s", self.view.value, view.value)
        self.view = view

    def cycle_view(self, step: int = 1) -> None:
        """Move ``step`` views forward (negative for backward), wrapping around."""
        views = list(View)
        self.switch_view(views[(views.index(self.view) + step) % len(views)])
