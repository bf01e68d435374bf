"""loguru sink configuration for the command line."""

from __future__ import annotations

import sys

from loguru import logger

__all__ = ["LOG_FORMAT", "configure_logging"]

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """
    Replace the loguru sinks with a single stderr sink.

    Parameters
    ----------
    level : str
        Minimum level name (DEBUG, INFO, WARNING, ...)
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
