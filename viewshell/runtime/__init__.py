"""Public runtime entry points.

Groups the interactive bootstrap (``run_shell``) and the lower-level event
loop contract used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import LoopState, RuntimeLoopCallbacks


def run_shell(*args, **kwargs):
    """Lazily import the shell entrypoint to keep package imports lightweight."""
    from .app import run_shell as _run_shell

    return _run_shell(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"LoopState", "RuntimeLoopCallbacks"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "LoopState",
    "RuntimeLoopCallbacks",
    "run_main_loop",
    "run_shell",
]
