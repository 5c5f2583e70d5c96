"""Frame rendering: view dispatch over the cell-buffer frame.

``render_view`` draws the shared chrome and then exactly one view renderer,
picked from ``VIEW_RENDERERS`` by the active view.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ..errors import RendererMissingError
from ..state import AppState, View
from .frame import Frame, Rect, Screen
from .views import (
    RenderContext,
    ViewRenderer,
    draw_status_bar,
    draw_tab_bar,
    render_details_view,
    render_help_view,
    render_list_view,
)

logger = logging.getLogger(__name__)

VIEW_RENDERERS: dict[View, ViewRenderer] = {
    View.LIST: render_list_view,
    View.DETAILS: render_details_view,
    View.HELP: render_help_view,
}


def validate_renderers(renderers: Mapping[View, ViewRenderer] = VIEW_RENDERERS) -> None:
    """Raise ``RendererMissingError`` for the first view without a renderer."""
    for view in View:
        if view not in renderers:
            raise RendererMissingError(view)


def render_view(
    frame: Frame,
    state: AppState,
    context: RenderContext,
    renderers: Mapping[View, ViewRenderer] | None = None,
) -> None:
    """Draw one complete frame for ``state.view``."""
    table = VIEW_RENDERERS if renderers is None else renderers
    renderer = table.get(state.view)
    if renderer is None:
        logger.error("no renderer for view %r", state.view)
        raise RendererMissingError(state.view)

    tab_bar, rest = frame.area.take_top(1)
    body, status_bar = rest.take_bottom(1)
    draw_tab_bar(frame, tab_bar, state, context)
    renderer(frame, body, state, context)
    draw_status_bar(frame, status_bar, state, context)


__all__ = [
    "Frame",
    "Rect",
    "RenderContext",
    "Screen",
    "VIEW_RENDERERS",
    "ViewRenderer",
    "render_view",
    "validate_renderers",
]
