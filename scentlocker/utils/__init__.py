"""Utility modules for configuration, logging, errors and image validation."""

from .config import get_config, load_config, reset_config
from .logger import (
    get_logger,
    log_execution_time,
    set_log_level,
    log_exception,
)

__all__ = [
    # Configuration
    "get_config",
    "load_config",
    "reset_config",
    # Logging
    "get_logger",
    "log_execution_time",
    "set_log_level",
    "log_exception",
]
