"""Handler setup for the ``lifegame`` logger hierarchy.

Library modules only call ``logging.getLogger(__name__)``; attaching
handlers is left to applications such as the CLI.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "lifegame"
LOG_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Route package log records to stderr and, optionally, a file.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        level: Threshold for the package logger
        log_file: Path of a log file, truncated on open

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging to {log_file or 'stderr only'} at {logging.getLevelName(level)}")
    return logger
