"""Centralized logging configuration."""

import logging
import sys
from pathlib import Path
from typing import Optional
from config.settings import settings

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log directory (created on first file handler)
LOG_DIR = Path(__file__).parent.parent / "logs"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level(level_name: str) -> int:
    """Convert log level name to logging constant, INFO when unknown."""
    return LOG_LEVELS.get(level_name.upper(), logging.INFO)


def _log_file_path(log_file: Optional[str]) -> Path:
    LOG_DIR.mkdir(exist_ok=True)
    default_name = f"{settings.APP_NAME.lower().replace(' ', '_')}.log"
    return LOG_DIR / (log_file or default_name)


def setup_logger(
    name: str,
    level: Optional[str] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure and return a logger instance.

    A stdout handler is always attached. A file handler under ``logs/`` is
    added when ``log_file`` is given or when the app runs in production
    (``DEBUG=False``).

    Args:
        name: Logger name (typically module name)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file name for file logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    log_level = get_log_level(level or settings.LOG_LEVEL)
    logger.setLevel(log_level)

    # Streamlit re-imports pages on every rerun
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file or settings.is_production():
        file_handler = logging.FileHandler(_log_file_path(log_file), encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Example:
        >>> from utils.logger import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Weekly report loaded")
    """
    return setup_logger(name)


def log_exception(logger: logging.Logger, exc: Exception, context: str = ""):
    """
    Log an exception with context and traceback.

    Args:
        logger: Logger instance
        exc: Exception to log
        context: What was being attempted (e.g. "Updating week targets")
    """
    prefix = f"{context}: " if context else ""
    logger.error(f"{prefix}{type(exc).__name__}: {exc}", exc_info=True)
