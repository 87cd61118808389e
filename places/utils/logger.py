"""Logging for places.

All modules log through the "places" logger. It is configured on first use:
a stderr handler, optionally a file handler, and a level taken from
PLACES_LOG_LEVEL. Records carry timestamp, level, logger, source location
and message.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from places.utils.config import log_level

LOGGER_NAME = "places"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _handler(handler: logging.Handler) -> logging.Handler:
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logger(
    name: str = LOGGER_NAME,
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure and return a logger. A logger that already has handlers is
    returned unchanged.

    Args:
        name: Logger name.
        level: Logging level. None reads PLACES_LOG_LEVEL (default INFO).
        log_file: Optional path to a log file, created with its parent directories.

    Returns:
        Configured logger.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    log.setLevel(level if level is not None else log_level())
    log.addHandler(_handler(logging.StreamHandler(sys.stderr)))
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        log.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8")))
    return log


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return the named logger, setting it up with defaults if nobody has yet."""
    return setup_logger(name)
