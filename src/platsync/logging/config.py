"""
Logging configuration for platsync.

Resolves the platform log directory and holds the knobs used by
setup_logging().
"""

import os
import platform
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from platsync.constants import LOG_FILE_NAME, LOG_RETENTION_DAYS, SENSITIVE_KEYS


class LogLevel(Enum):
    """Log levels accepted in settings.json and on the command line"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class LogConfig:
    """Configuration class for platsync logging"""

    log_filename: str = f"{LOG_FILE_NAME}.log"
    log_retention_days: int = LOG_RETENTION_DAYS

    default_level: LogLevel = LogLevel.INFO
    console_level: LogLevel = LogLevel.WARNING

    include_timestamps: bool = True
    include_thread_info: bool = False

    # API call records go to the same file through their own formatter
    log_api_calls: bool = True

    sanitize_sensitive_data: bool = True
    sensitive_keys: tuple = SENSITIVE_KEYS

    # Overrides the platform directory; used by tests
    log_directory: Optional[Path] = None


def get_log_directory() -> Path:
    """
    Get the log directory for the current operating system.

    Falls back to ./logs when the platform directory cannot be created.
    """
    system = platform.system().lower()

    if system == "windows":
        appdata = os.environ.get("APPDATA")
        base_dir = Path(appdata) if appdata else Path.home()
        log_dir = base_dir / LOG_FILE_NAME / "logs"
    elif system == "darwin":
        log_dir = Path.home() / "Library" / "Logs" / LOG_FILE_NAME
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME")
        base_dir = Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"
        log_dir = base_dir / LOG_FILE_NAME / "logs"

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir
    except OSError:
        fallback_dir = Path.cwd() / "logs"
        fallback_dir.mkdir(exist_ok=True)
        return fallback_dir


def get_log_file_path(config: Optional[LogConfig] = None) -> Path:
    """Get the full path to the log file"""
    if config is None:
        config = LogConfig()

    log_dir = config.log_directory or get_log_directory()
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / config.log_filename
