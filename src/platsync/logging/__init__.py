"""
platsync logging module.

Daily-rotated log file in the platform log directory, sanitization of
secrets, and structured helpers for API calls and credential events.
"""

from .config import LogConfig, LogLevel, get_log_directory
from .logger import (
    get_logger,
    log_api_call,
    log_authentication_event,
    setup_logging,
)
from .utils import mask_secret, sanitize_data

__all__ = [
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_authentication_event",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "mask_secret",
    "get_log_directory",
]
