"""Logging configuration."""

import logging
import sys

from brokerage.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(threadName)s] %(message)s"

# Third-party loggers kept at WARNING regardless of the service level
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore")


def setup_logging() -> logging.Logger:
    """
    Configure logging for the back office and return its package logger.

    The `brokerage` logger follows LOG_LEVEL. Quote refreshes run on worker
    threads, so the thread name is part of every record.
    """
    settings = get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown LOG_LEVEL: {settings.log_level!r}")

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)

    app_logger = logging.getLogger("brokerage")
    app_logger.setLevel(level)
    app_logger.debug("Logging configured at %s", settings.log_level.upper())
    return app_logger
