"""Logging configuration module."""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with a single stderr sink at ``level``."""
    logger.remove()
    _ = logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
