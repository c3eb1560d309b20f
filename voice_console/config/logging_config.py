"""
Logging setup for the console.

Everything logs through the ``voice_console`` logger: reducer drops, socket
lifecycle and API errors. It writes to stdout and, unless disabled, to a rotating
file. Settings are read from the environment each time configure_logging runs,
so a launcher can choose the level before the app module is imported.

Environment:
    LOG_LEVEL: Level name, INFO when unset or unknown
    LOG_DIR: Directory for the log file, "logs" by default; empty disables the file
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from voice_console.config.constants import LOGGER_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIR = "logs"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def resolve_log_level(level: Optional[str] = None) -> int:
    """Numeric level for ``level``, falling back to LOG_LEVEL and then INFO."""
    name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def log_file_path() -> Optional[Path]:
    log_dir = os.getenv("LOG_DIR", DEFAULT_LOG_DIR)
    if not log_dir:
        return None
    return Path(log_dir) / f"{LOGGER_NAME}.log"


def _file_handler(path: Path) -> RotatingFileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(path, maxBytes=MAX_LOG_SIZE, backupCount=BACKUP_COUNT)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the console logger, replacing any handlers from an earlier call.

    Args:
        level: Optional level name overriding the LOG_LEVEL environment variable

    Returns:
        logging.Logger: The configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_log_level(level))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]

    path = log_file_path()
    file_error = None
    if path is not None:
        try:
            handlers.append(_file_handler(path))
        except OSError as e:
            file_error = e

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Keep console output out of the root logger (uvicorn configures its own)
    logger.propagate = False

    if file_error is not None:
        logger.warning(f"Could not set up file logging at {path}: {file_error}")
    logger.info(f"Logging configured at {logging.getLevelName(logger.level)}")
    return logger
