"""Package logger setup driven by ``PHOTO_RESIZER_LOG_LEVEL``."""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..config import get_settings

PACKAGE_LOGGER_NAME = "photo_resizer"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER: Optional[logging.Handler] = None


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Attach the stream handler once and (re)apply *level*.

    Without an explicit *level* the configured ``log_level`` setting is used.
    Calling this again only changes the level; it never stacks handlers.
    """

    global _HANDLER
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if _HANDLER is None:
        _HANDLER = logging.StreamHandler()
        _HANDLER.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(_HANDLER)
    package_logger.setLevel(level if level is not None else get_settings().log_level)
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or its child *name*, configuring on first use."""

    if _HANDLER is None:
        configure_logging()
    if not name:
        return logging.getLogger(PACKAGE_LOGGER_NAME)
    if name == PACKAGE_LOGGER_NAME or name.startswith(PACKAGE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}")


__all__ = ["LOG_FORMAT", "PACKAGE_LOGGER_NAME", "configure_logging", "get_logger"]
