"""Logging setup for the starcharts package."""

from __future__ import annotations

import logging

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a stream handler to the package logger and set its level.

    Calling it again only changes the level; handlers are not stacked.
    """
    logger = logging.getLogger("starcharts")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    if not any(getattr(h, "_starcharts", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._starcharts = True
        logger.addHandler(handler)
    return logger
