"""Logging helper — stderr stream handler with optional file output.

Frames are written to stdout, so log records always go to stderr to
keep the animation readable.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def get_logger(name: str, file_path: str | Path | None = None) -> logging.Logger:
    """Return a configured logger, attaching a file handler if requested.

    Handlers are only attached the first time a name is requested, so
    repeated calls do not duplicate output.

    Args:
        name: Logger name, usually ``__name__``.
        file_path: Optional log file; parent directories are created.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        formatter = logging.Formatter(_FORMAT)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        if file_path:
            path = Path(file_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            f_handler = logging.FileHandler(path, encoding="utf-8")
            f_handler.setFormatter(formatter)
            logger.addHandler(f_handler)
        logger.setLevel(logging.INFO)
    return logger


def set_level(level: int | str) -> None:
    """Set the level of every ``neighborhood`` logger created so far."""
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith("neighborhood") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
