"""Logging setup for hosts embedding undonete."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from . import config


def configure_logging(
    level: int = logging.INFO,
    log_path: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """Configure and return the ``undonete`` logger.

    The handler setup is idempotent to avoid duplicate handlers when called
    repeatedly (e.g., in tests).  Output is mirrored to stdout; when
    *log_path* is given a rotating file handler limits on-disk log growth.
    """

    logger = logging.getLogger(config.LOGGER_NAME)
    logger.setLevel(level)
    if any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        return logger

    formatter = logging.Formatter(config.LOG_FORMAT)

    if log_path is not None:
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            path,
            maxBytes=config.LOG_MAX_BYTES,
            backupCount=config.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    logger.propagate = False

    return logger
