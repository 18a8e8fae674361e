"""Utility modules for configuration, logging, and error handling."""

from .config import AppConfig, get_config, load_config, reset_config
from .logger import (
    apply_log_level,
    get_logger,
    log_exception,
    log_execution_time,
    set_log_level,
)

__all__ = [
    # Configuration
    "AppConfig",
    "get_config",
    "load_config",
    "reset_config",
    # Logging
    "get_logger",
    "apply_log_level",
    "log_execution_time",
    "set_log_level",
    "log_exception",
]
