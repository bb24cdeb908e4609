"""
Logging setup for the fuzzy-segment CLI and scripts.

Library modules only create `logging.getLogger(__name__)` loggers; this is
where the console line format is chosen. Without an explicit level the
FUZZY_SEGMENT_DEBUG environment variable switches the package to DEBUG,
and FUZZY_SEGMENT_LOG_FILE adds a copy of the log on disk.
"""
import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "fuzzy_segment"
DEBUG_ENV = "FUZZY_SEGMENT_DEBUG"
LOG_FILE_ENV = "FUZZY_SEGMENT_LOG_FILE"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def level_from_env() -> int:
    flag = os.environ.get(DEBUG_ENV, "").strip().lower()
    return logging.INFO if flag in ("", "0", "false", "no") else logging.DEBUG


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the 'fuzzy_segment' loggers to stdout, and to `log_file` if given.

    Args:
        level: Logging level; read from FUZZY_SEGMENT_DEBUG when None.
        log_file: Optional path, overwritten; read from FUZZY_SEGMENT_LOG_FILE when None.

    Calling it again replaces the handlers of the previous call.
    """
    level = level_from_env() if level is None else level
    log_file = log_file or os.environ.get(LOG_FILE_ENV) or None

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("logging at %s%s", logging.getLevelName(level),
                 f", copied to {log_file}" if log_file else "")
    return logger
