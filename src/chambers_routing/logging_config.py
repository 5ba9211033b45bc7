"""Logging setup for the chambers routing service."""

import logging
from typing import Optional

from rich.logging import RichHandler

from .config import settings

LOGGER_NAME = "chambers_routing"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Attach a rich console handler to the package logger.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=settings.DEBUG, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(name)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    return logger
