"""Logging setup for the notes service."""

from __future__ import annotations

import logging

LOGGER_NAME = "notes_api"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling it again only updates the level, so app factories and scripts can
    both call it without duplicating output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    if not any(getattr(h, "_notes_api", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._notes_api = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
