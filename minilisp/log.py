"""Logging configuration for the command line.

The library itself only creates module loggers; handlers are installed here,
by the CLI, and never on import.
"""

from __future__ import annotations

import logging

from minilisp.config import get_log_level

LOG_FORMAT = "%(levelname)s - %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """DEBUG when verbose, otherwise the level from MINILISP_LOG_LEVEL (default ERROR)."""
    level = logging.DEBUG if verbose else logging.getLevelName(get_log_level())
    if not isinstance(level, int):
        level = logging.ERROR
    logging.basicConfig(format=LOG_FORMAT, level=level)
    logging.getLogger("minilisp").setLevel(level)
