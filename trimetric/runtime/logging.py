"""Logging initialization."""

from __future__ import annotations

import logging

from trimetric.config.logging import LOG_LEVEL, LOG_FORMAT, SHOW_ACCESS_LOGS


def configure_logging() -> None:
    # One line per HTTP request drowns the session logs. Keep it tame unless explicitly enabled.
    if not SHOW_ACCESS_LOGS:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
