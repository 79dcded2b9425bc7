import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from .constants import (
    DEFAULT_LOG_LEVEL,
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    LOG_DATE_FORMAT,
    LOG_FILE_PREFIX,
    LOG_LEVELS,
    LOG_MESSAGE_FORMAT,
    LOG_TIMESTAMP_FORMAT,
    LOGGER_NAME,
)

_logger_configured = False


def get_module_logger(module_name: str) -> logging.Logger:
    """Return a child of the package logger; handlers live on the package logger."""
    setup_logger()
    return logging.getLogger(f"{LOGGER_NAME}.{module_name}")


def _resolve_level(level_name: Optional[str]) -> int:
    name = (level_name or DEFAULT_LOG_LEVEL).strip().upper()
    if name not in LOG_LEVELS:
        name = DEFAULT_LOG_LEVEL
    return getattr(logging, name)


def setup_logger(
    level_name: Optional[str] = None, log_dir: Optional[str] = None
) -> logging.Logger:
    global _logger_configured

    logger = logging.getLogger(LOGGER_NAME)

    if _logger_configured:
        return logger

    # Read straight from the environment: config.py logs through us.
    if level_name is None:
        level_name = os.environ.get(ENV_LOG_LEVEL)
    if log_dir is None:
        log_dir = os.environ.get(ENV_LOG_DIR, "").strip()

    level = _resolve_level(level_name)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(
        LOG_MESSAGE_FORMAT,
        datefmt=LOG_TIMESTAMP_FORMAT,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        try:
            logs_dir = Path(log_dir)
            logs_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime(LOG_DATE_FORMAT)
            log_file = logs_dir / f"{LOG_FILE_PREFIX}{timestamp}.log"

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            logger.info(f"Logging to: {log_file}")

        except OSError as e:
            logger.warning(f"Could not set up file logging: {e}")

    _logger_configured = True
    return logger


def reset_logger() -> None:
    """Drop package handlers so the next call to setup_logger() reconfigures."""
    global _logger_configured

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    _logger_configured = False
