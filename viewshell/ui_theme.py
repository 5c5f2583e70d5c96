"""UI theme definitions and selection helpers.

Themes are semantic ANSI palettes. Renderers ask for a role (``border``,
``highlight``) and never hard-code escape codes.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    border: str
    title: str
    tab_active: str
    tab_inactive: str
    text: str
    dim: str
    highlight: str
    highlight_symbol: str
    status: str
    help_heading: str
    help_key: str


DEFAULT_THEME = UITheme(
    name="default",
    border="\033[38;5;45m",
    title="\033[1;38;5;81m",
    tab_active="\033[1;7;38;5;81m",
    tab_inactive="\033[38;5;250m",
    text="\033[38;5;252m",
    dim="\033[2;38;5;250m",
    highlight="\033[1;30;48;5;81m",
    highlight_symbol=">> ",
    status="\033[7m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    border="\033[38;5;31m",
    title="\033[1;38;5;45m",
    tab_active="\033[1;7;38;5;45m",
    tab_inactive="\033[38;5;110m",
    text="\033[38;5;153m",
    dim="\033[2;38;5;110m",
    highlight="\033[1;38;5;16;48;5;39m",
    highlight_symbol=">> ",
    status="\033[38;5;16;48;5;31m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
)

PLAIN_THEME = UITheme(
    name="plain",
    border="",
    title="",
    tab_active="",
    tab_inactive="",
    text="",
    dim="",
    highlight="",
    highlight_symbol="> ",
    status="",
    help_heading="",
    help_key="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
