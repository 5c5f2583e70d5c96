"""Logging setup for the shell.

The full-screen UI owns stdout and stderr while it runs, so log records only
ever go to a file. Without ``--log-file`` the package logger is silent.
"""

from __future__ import annotations

import logging
from pathlib import Path

PACKAGE_LOGGER = "viewshell"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None = None, level: str = "INFO") -> logging.Logger:
    """Attach a file handler (or a null handler) to the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False
    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger
