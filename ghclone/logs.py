"""File logging setup.

The terminal is owned by the UI, so log records never go to stdout/stderr
while the loop runs. Without a log file the package logger gets a
``NullHandler``.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s"


def configure_logging(log_file: Path | None, level: int = logging.DEBUG) -> logging.Logger:
    """Attach a file handler to the ``ghclone`` logger when ``log_file`` is set."""
    logger = logging.getLogger("ghclone")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False
    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["configure_logging", "LOG_FORMAT"]
