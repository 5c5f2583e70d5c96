"""Command-line front door for viewshell.

Parses CLI options, merges them over the optional JSON config, and dispatches
into the interactive runtime (or renders a single frame with ``--render``).
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .config import read_shell_config
from .errors import ShellError
from .keymap import Keymap
from .logging_config import configure_logging
from .runtime.app import render_snapshot, run_shell
from .state import AppState, View
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

_VIEW_NAMES = tuple(view.value for view in View)
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="viewshell",
        description="Full-screen terminal shell with switchable views over a navigable list.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to JSON config file.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--view", choices=_VIEW_NAMES, default=None, help="View to show first.")
    parser.add_argument(
        "--item",
        dest="items",
        action="append",
        default=None,
        metavar="TEXT",
        help="List item (repeatable). Replaces configured items.",
    )
    parser.add_argument(
        "--key-events",
        action="store_true",
        help="Ask the terminal for key press/release reporting (kitty keyboard protocol).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write log records to this file.")
    parser.add_argument("--log-level", choices=_LOG_LEVELS, default="INFO", help="Log level for --log-file.")
    parser.add_argument("--render", choices=_VIEW_NAMES, metavar="VIEW", help="Print one frame of VIEW and exit.")
    parser.add_argument("--max-cols", type=_positive_int, default=None, help="Columns for --render output.")
    parser.add_argument("--rows", type=_positive_int, default=None, help="Rows for --render output.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the shell.

    Shell errors (bad config, missing renderer, no terminal) exit non-zero with
    a one-line message; anything else propagates after the terminal is restored.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    try:
        config = read_shell_config(args.config)
        items = tuple(args.items) if args.items is not None else config.items
        view = View.from_name(args.view) if args.view is not None else config.view
        theme = resolve_theme(args.theme or config.theme, no_color=args.no_color)
        keymap = Keymap.with_overrides(config.bindings)
        state = AppState.new(items, view)

        if args.render is not None:
            state.switch_view(View.from_name(args.render))
            term = shutil.get_terminal_size((80, 24))
            sys.stdout.write(
                render_snapshot(
                    state,
                    theme=theme,
                    keymap=keymap,
                    columns=args.max_cols or term.columns,
                    rows=args.rows or term.lines,
                )
            )
            return

        run_shell(state, theme=theme, keymap=keymap, report_key_events=args.key_events)
    except ShellError as exc:
        logger.error("%s", exc)
        raise SystemExit(f"viewshell: {exc}") from exc
    except Exception:
        logger.exception("shell crashed")
        raise


if __name__ == "__main__":
    main()
