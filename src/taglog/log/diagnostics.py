"""Diagnostics about the logger itself (never the log lines it writes)."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# Unconfigured, records at WARNING and above reach stderr via logging.lastResort.
logger = logging.getLogger("taglog")


def configure_diagnostics(
    level: int = logging.WARNING,
    *,
    rich_tracebacks: bool = False,
) -> logging.Logger:
    """
    Route taglog's own diagnostics to a Rich console on standard error.

    Returns
    -------
    logger
        The configured logger named "taglog".

    Usage example
    -------------
        configure_diagnostics(logging.DEBUG)
    """
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=rich_tracebacks,
        show_path=False,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)

    logger.debug("Diagnostics configured (level=%s)", logging.getLevelName(level))
    return logger
