"""Logging setup shared by all javagen modules."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "javagen"


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a javagen module (pass ``__name__``)."""
    return logging.getLogger(name)


def configure_logging(
    level: int = logging.WARNING, console: Optional[Console] = None
) -> logging.Logger:
    """
    Route javagen log records to a rich handler on stderr.

    Calling this again replaces the previously installed handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
