"""Centralized logging configuration for the mintime package."""

from __future__ import annotations

import logging
import os
from typing import Final

# Allow environment override without touching handlers
_LEVEL_NAME: Final[str] = os.getenv("MINTIME_LOG_LEVEL", "INFO").upper()
_PACKAGE_LOGGER_LEVEL: Final[int] = getattr(logging, _LEVEL_NAME, logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """Return a module-level logger without altering global handlers.

    Handlers are the application's business; only the CLI configures them.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_PACKAGE_LOGGER_LEVEL)
    return logger


def set_package_level(level: int) -> None:
    """Set the level of the ``mintime`` logger and every module logger under it.

    Module loggers carry their own level from ``get_logger``, so the root
    logger's level alone cannot lower their threshold.
    """
    logging.getLogger("mintime").setLevel(level)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("mintime.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)
