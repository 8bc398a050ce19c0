"""Logging setup for the goalsheet CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "goalsheet"


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Send goalsheet log records to stderr through rich.

    Args:
        level: Level name (e.g. "DEBUG") or number.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
