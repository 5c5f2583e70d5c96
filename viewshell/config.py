"""Read-only JSON configuration.

The file is optional: a missing, unreadable, or non-object file means
"defaults". Keys that are present must be well formed, though; a bad item
list or an unknown view name raises ``ConfigError`` instead of being guessed.
Nothing is ever written back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigError
from .keymap import Command
from .state import DEFAULT_ITEMS, View

CONFIG_PATH = Path.home() / ".config" / "viewshell.json"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShellConfig:
    items: tuple[str, ...] = DEFAULT_ITEMS
    view: View = View.LIST
    theme: str | None = None
    bindings: dict[Command, tuple[str, ...]] = field(default_factory=dict)


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    target = CONFIG_PATH if path is None else path
    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", target, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", target)
        return {}
    return data


def _parse_items(value: object) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError("'items' must be a list of strings")
    return tuple(value)


def _parse_view(value: object) -> View:
    try:
        return View.from_name(str(value))
    except ValueError:
        names = ", ".join(view.value for view in View)
        raise ConfigError(f"unknown view {value!r} (expected one of: {names})") from None


def _parse_bindings(value: object) -> dict[Command, tuple[str, ...]]:
    if not isinstance(value, dict):
        raise ConfigError("'bindings' must be an object mapping command names to key lists")
    bindings: dict[Command, tuple[str, ...]] = {}
    for name, keys in value.items():
        try:
            command = Command.from_name(name)
        except ValueError:
            raise ConfigError(f"unknown command {name!r} in 'bindings'") from None
        if isinstance(keys, str):
            keys = [keys]
        if not isinstance(keys, list) or not keys or not all(isinstance(key, str) and key for key in keys):
            raise ConfigError(f"keys for {name!r} must be a non-empty list of strings")
        bindings[command] = tuple(keys)
    return bindings


def parse_config(data: dict[str, object]) -> ShellConfig:
    """Validate a decoded config object into a ``ShellConfig``."""
    items = _parse_items(data["items"]) if "items" in data else DEFAULT_ITEMS
    view = _parse_view(data["view"]) if "view" in data else View.LIST
    theme = data.get("theme")
    if theme is not None and not isinstance(theme, str):
        raise ConfigError("'theme' must be a string")
    bindings = _parse_bindings(data["bindings"]) if "bindings" in data else {}
    return ShellConfig(items=items, view=view, theme=theme, bindings=bindings)


def read_shell_config(path: Path | None = None) -> ShellConfig:
    return parse_config(load_config(path))
