"""
Logging setup for the ``starbind`` logger hierarchy.
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

from .configuration import LoggingConfig

ROOT_LOGGER = "starbind"


def configure_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Install a handler on the package logger.

    Logs go to stderr unless ``config.file_path`` is set, in which case a
    rotating file handler is used. Calling this again replaces the handler.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(ROOT_LOGGER)

    for handler in list(logger.handlers):
        if getattr(handler, "_starbind_handler", False):
            logger.removeHandler(handler)
            handler.close()

    if config.file_path:
        handler: logging.Handler = RotatingFileHandler(
            config.file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter(config.format))
    handler._starbind_handler = True
    logger.addHandler(handler)
    logger.setLevel(config.level.upper())
    return logger


__all__ = ["configure_logging", "ROOT_LOGGER"]
