"""Structured logging configuration for ScentLocker.

This module provides colored console logging and rotating file logging
with timing helpers used around dataset loads and searches.
"""

import logging
import os
import time
from contextlib import contextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import colorlog


CONSOLE_FORMAT_COLOR = "%(log_color)s%(levelname)-8s%(reset)s %(blue)s%(name)s%(reset)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "scentlocker.log"


def _setup_console_handler(level: int) -> logging.Handler:
    """Create and configure a colored console handler.

    Args:
        level: Logging level

    Returns:
        Configured console handler
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = colorlog.ColoredFormatter(
        CONSOLE_FORMAT_COLOR,
        datefmt=DATE_FORMAT,
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    )

    console_handler.setFormatter(formatter)
    return console_handler


def _setup_file_handler(level: int, log_dir: Optional[Path] = None) -> logging.Handler:
    """Create and configure rotating file handler.

    Args:
        level: Logging level
        log_dir: Directory for log files (default: logs/ in project root,
                 or the SCENTLOCKER_LOG_DIR environment variable)

    Returns:
        Configured rotating file handler
    """
    if log_dir is None:
        env_log_dir = os.environ.get('SCENTLOCKER_LOG_DIR')
        if env_log_dir:
            log_dir = Path(env_log_dir)
        else:
            project_root = Path(__file__).parent.parent.parent
            log_dir = project_root / "logs"

    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / LOG_FILE_NAME

    # max 10MB, keep 5 backups
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setLevel(level)

    formatter = logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT)
    file_handler.setFormatter(formatter)

    return file_handler


def get_logger(name: str, log_dir: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Get or create a logger with console and file handlers.

    Args:
        name: Logger name (typically __name__ from calling module)
        log_dir: Directory for log files (default: logs/)
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
              If None, uses LOG_LEVEL environment variable, defaulting to INFO.
              Pass config.log_level from AppConfig for config-driven logging.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers on repeated calls
    if not logger.handlers:
        if level is not None:
            log_level_str = level.upper()
        else:
            log_level_str = os.environ.get('LOG_LEVEL', 'INFO').upper()
        log_level = getattr(logging, log_level_str, logging.INFO)

        logger.setLevel(log_level)
        logger.addHandler(_setup_console_handler(log_level))
        logger.addHandler(_setup_file_handler(log_level, log_dir))

        logger.propagate = False

    return logger


@contextmanager
def log_execution_time(logger: logging.Logger, operation: str):
    """Context manager to automatically log operation execution time.

    Usage:
        with log_execution_time(logger, "vibe search"):
            engine.search_by_vibe(fragrances, query)
    """
    logger.debug(f"Starting: {operation}")
    start_time = time.time()

    try:
        yield
    finally:
        duration = time.time() - start_time
        logger.debug(f"Completed: {operation} in {duration:.3f}s")


def set_log_level(logger: logging.Logger, level: str) -> None:
    """Change the log level of a logger and all its handlers.

    Args:
        logger: Logger instance
        level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level_upper = level.upper()
    log_level = getattr(logging, level_upper, logging.INFO)

    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)

    logger.info(f"Log level changed to {level_upper}")


def log_exception(logger: logging.Logger, operation: str, exception: Exception) -> None:
    """Log an exception with context.

    Args:
        logger: Logger instance
        operation: Name of the operation that failed
        exception: The exception that was raised
    """
    logger.error(f"Failed: {operation} ({exception})", exc_info=True)
