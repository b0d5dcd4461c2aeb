"""Logging setup for the ``triangulator`` logger namespace.

Every module logs through ``logging.getLogger(__name__)``, so configuring
the package logger here covers the engine and the frontend alike. The
configuration is applied with ``logging.config.dictConfig``; reapplying it
replaces the package handlers rather than adding to them.
"""

from __future__ import annotations

import logging
import logging.config

LOGGER_NAME = "triangulator"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def build_logging_config(
    level: int = logging.INFO, log_file: str | None = None
) -> dict:
    """Build the ``dictConfig`` schema for the package logger.

    Args:
        level: Threshold for the logger and all of its handlers.
        log_file: Optional path; when given, logs are also written there
            (truncated on start, UTF-8).

    Returns:
        A dict accepted by ``logging.config.dictConfig``.
    """
    handlers: dict = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": "plain",
            "level": level,
        }
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "filename": log_file,
            "mode": "w",
            "encoding": "utf-8",
            "formatter": "plain",
            "level": level,
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT}
        },
        "handlers": handlers,
        "loggers": {
            LOGGER_NAME: {"level": level, "handlers": list(handlers)}
        },
    }


def setup_logging(
    level: int = logging.INFO, log_file: str | None = None
) -> logging.Logger:
    """Configure the package logger for console (and optional file) output.

    Args:
        level: A ``logging`` level such as ``logging.DEBUG``.
        log_file: Optional path for a second, file-backed handler.

    Returns:
        The configured ``triangulator`` logger.
    """
    logging.config.dictConfig(build_logging_config(level, log_file))
    logger = logging.getLogger(LOGGER_NAME)
    logger.debug("Logging initialized at level %s", logging.getLevelName(level))
    return logger
