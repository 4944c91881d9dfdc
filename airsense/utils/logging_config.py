"""
Logging configuration for AirSense.

Console output plus two rotating files under ``LOG_DIR``: everything from
INFO up in ``airsense.log`` and errors only in ``airsense_errors.log``, which
is where data-source failures hidden from API clients end up.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from airsense.config import settings

DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
PRODUCTION_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx", "httpcore")


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> logging.Logger:
    """
    Configure the root logger.

    Safe to call more than once; previous handlers are replaced.

    Returns:
        The root logger
    """
    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        fmt=DEBUG_FORMAT if settings.DEBUG else PRODUCTION_FORMAT,
        datefmt=DATE_FORMAT,
    )

    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL)
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    console.setFormatter(formatter)
    root.addHandler(console)

    root.addHandler(_file_handler(log_dir / "airsense.log", logging.INFO, formatter))
    root.addHandler(_file_handler(log_dir / "airsense_errors.log", logging.ERROR, formatter))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.info(f"Logging initialized (level {settings.LOG_LEVEL}, debug {settings.DEBUG})")
    return root


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__ of the module)
    """
    return logging.getLogger(name)
