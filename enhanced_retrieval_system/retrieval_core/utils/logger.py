# Logging setup functions
# File: retrieval_core/utils/logger.py

import logging
import sys
from typing import Optional, Union

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
DEFAULT_LOG_LEVEL = logging.INFO

configured_loggers = set()


def setup_logger(name: Optional[str] = None,
                 level: Union[int, str] = DEFAULT_LOG_LEVEL,
                 log_format: str = DEFAULT_LOG_FORMAT) -> logging.Logger:
    """
    Sets up a stdout handler on a logger (the root logger when name is None).

    Calling it again for the same logger only updates the level.

    Args:
        name: Name of the logger, e.g. 'retrieval_core'.
        level: Logging level as an int or a level name such as 'DEBUG'.
        log_format: Format string for log messages.

    Returns:
        The configured logger instance.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = DEFAULT_LOG_LEVEL

    logger = logging.getLogger(name)
    logger_key = name if name else "root"
    logger.setLevel(level)

    stream_handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
    if logger_key in configured_loggers and stream_handlers:
        for h in stream_handlers:
            h.setLevel(level)
        logger.debug(f"Logger '{logger_key}' already configured. Level set to {logging.getLevelName(level)}.")
        return logger

    if not stream_handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(log_format, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.debug(f"Configured new StreamHandler for logger '{logger_key}'.")

    # Named loggers own their output; don't echo through root as well.
    if name:
        logger.propagate = False

    configured_loggers.add(logger_key)
    return logger
