"""
Logging setup for the officeslots package.

All modules log through ``logging.getLogger(__name__)``; output goes to a
single rich handler on the package logger.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "officeslots"


def setup_logging(level: str = "INFO", console: Console | None = None) -> logging.Logger:
    """
    Configure logging for the application.

    Safe to call repeatedly: the handler is installed once and only the
    level is updated afterwards.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger
