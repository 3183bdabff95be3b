"""
Logging configuration for the strike finder.

Library modules log through child loggers of "strikefinder" and only at
debug or warning level; applications call setup_logging() once.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "strikefinder"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach stderr (and optionally file) handlers to the "strikefinder" logger.

    Calling it again replaces the handlers from the previous call. Records
    are not propagated to the root logger.

    Example:
        >>> logger = setup_logging("DEBUG")
        >>> logger.debug("Bisection stopped after %d iterations", 12)
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level.upper())
    logger.handlers.clear()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the "strikefinder" logger, or its child `name` (e.g. "solvers.bisection")."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
