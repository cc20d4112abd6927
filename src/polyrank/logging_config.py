"""Logging setup for the ``polyrank`` logger namespace.

Library modules only create module loggers; handlers are attached here,
by the command line or by an application embedding the package.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "polyrank"

# -v count -> console level
_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def verbosity_level(verbosity: int) -> int:
    """Map a count of ``-v`` flags to a logging level (0 is WARNING)."""
    if verbosity < 0:
        raise ValueError(f"verbosity must be >= 0, got {verbosity}")
    return _VERBOSITY_LEVELS[min(verbosity, len(_VERBOSITY_LEVELS) - 1)]


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Configure and return the ``polyrank`` logger.

    The console handler writes to stderr at the level picked by
    *verbosity*, keeping stdout free for command output.  A *log_file*
    always records everything down to DEBUG with timestamps, whatever the
    console level.  Calling this again replaces the previous handlers.
    """
    console_level = verbosity_level(verbosity)
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.debug("Logging initialized (console %s).", logging.getLevelName(console_level))
    return logger
