"""Exception types raised by the shell.

I/O failures from the terminal are not wrapped: ``OSError`` and ``EOFError``
propagate as-is so the caller sees the real cause.
"""

from __future__ import annotations


class ShellError(Exception):
    """Base class for errors the command-line front door reports without a traceback."""


class ConfigError(ShellError):
    """Raised when configuration values are present but malformed."""


class RendererMissingError(ShellError):
    """Raised when a view has no renderer registered for it."""

    def __init__(self, view: object) -> None:
        super().__init__(f"no renderer registered for view {view!r}")
        self.view = view
