"""Logging setup for tern2dts commands."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "tern2dts"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the tern2dts hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    verbose: bool = False, console: Optional[Console] = None
) -> logging.Logger:
    """
    Route tern2dts log records to a rich console handler.

    Args:
        verbose: Emit DEBUG records when True, INFO otherwise
        console: Console to log to (stderr by default)

    Returns:
        The configured package logger
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger
