"""Logging setup for applications embedding the Spotify control client.

The library itself only logs through module loggers; ``setup_logging`` is
for the host application. It installs a readable console handler and, when
asked, a rotating JSON file whose records keep the ``log_with_context``
fields as top-level keys.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from spotify_control.config import get_settings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s %(filename)s %(lineno)d"


def setup_logging(log_level: str | None = None, log_file: Path | None = None) -> logging.Logger:
    """Configure the root logger.

    Args:
        log_level: Logging level name; defaults to the ``log_level`` setting
        log_file: Path of the JSON log file, or None for console only

    Returns:
        Configured root logger instance
    """
    if log_level is None:
        log_level = get_settings().log_level
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setFormatter(JsonFormatter(JSON_FORMAT, timestamp=True))
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    # A port scan logs one httpx line per port
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a module logger (pass ``__name__``)."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log ``message`` at ``level`` with structured context fields.

    Args:
        logger: Logger instance
        level: Log level name (debug, info, warning, error, critical)
        message: Log message
        **extra_fields: Context such as ``port`` or ``event_type``, emitted as JSON keys
    """
    getattr(logger, level.lower())(message, extra=extra_fields)
