"""Logging setup for the CLI.

The TUI owns the terminal, so log records never go to stdout/stderr: they
go to a file when one is requested and are dropped otherwise.
"""

from __future__ import annotations

import logging
import os

LOG_FILE_ENV = "ZIPVIEW_LOG_FILE"
LOG_LEVEL_ENV = "ZIPVIEW_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: str | None = None, level: str | None = None) -> logging.Logger:
    """Attach a file handler (or a ``NullHandler``) to the package logger."""
    logger = logging.getLogger("zipview")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))
    logger.propagate = False

    target = log_file or os.environ.get(LOG_FILE_ENV)
    if target:
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)
    return logger
