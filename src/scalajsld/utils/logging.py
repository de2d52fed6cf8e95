"""Logging setup for scalajsld.

The whole application logs through the ``scalajsld`` logger hierarchy.
:func:`setup_logging` attaches a single Rich handler to it; the same
logger is handed to the linker backend.
"""

from __future__ import annotations

import logging
from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME: str = "scalajsld"


def setup_logging(level: int = logging.INFO, *, console: Console | None = None) -> logging.Logger:
    """Configure and return the ``scalajsld`` logger.

    Parameters
    ----------
    level:
        Minimum level to emit (``DEBUG`` for ``-d``, ``WARNING`` for
        ``-q``, ``ERROR`` for ``-qq``).
    console:
        Rich console to render into.  Rich's default console is used
        when omitted.

    Calling this again replaces the previously installed handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
