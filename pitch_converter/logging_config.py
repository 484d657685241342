"""Logging configuration for the command-line interface.

Library modules only create loggers with ``logging.getLogger(__name__)``.
The CLI calls :func:`configure_logging` once to route them to stderr through
rich, so log output never mixes with conversion results on stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "pitch_converter"
_HANDLER_TAG = "_pitch_converter_handler"


def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """
    Install a single rich handler on the package logger.

    Calling this again replaces the level but never adds a second handler.

    Args:
        verbose: Log DEBUG messages instead of WARNING and above
        console: Console to log to (default: a new stderr console)

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.WARNING

    handler = next((h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)), None)
    if handler is None:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=verbose,
            markup=False,
        )
        setattr(handler, _HANDLER_TAG, True)
        logger.addHandler(handler)

    handler.setLevel(level)
    logger.setLevel(level)
    return logger
