"""
Main logging module for platsync.

Provides logger setup with a daily rotating file, an optional stderr
handler, and structured helpers for API calls and credential events.
"""

import json
import logging
import logging.handlers
import sys
from typing import Any, Dict, Optional

from platsync.constants import SENSITIVE_KEYS
from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import APICallFormatter, PlatsyncFormatter
from .utils import cleanup_old_logs, sanitize_data

_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False


def _level_from_settings() -> Optional[LogLevel]:
    """Read log_level from the user's settings.json, if any"""
    from platsync.utils.config_store import ConfigStore

    try:
        settings_file = ConfigStore().settings_file
        if not settings_file.exists():
            return None
        with open(settings_file, "r", encoding="utf-8") as f:
            user_level = json.load(f).get("log_level")
    except (OSError, ValueError):
        return None

    if user_level in [level.value for level in LogLevel]:
        return LogLevel(user_level)
    return None


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the platsync logging system.

    Args:
        config: LogConfig instance, uses defaults plus settings.json if None
        force_reconfigure: Reconfigure even if already set up
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig()
        user_level = _level_from_settings()
        if user_level:
            config.default_level = user_level

    log_file_path = get_log_file_path(config)
    level = getattr(logging, config.default_level.value)

    root_logger = logging.getLogger("platsync")
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when="midnight",
        backupCount=config.log_retention_days,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setLevel(level)
    file_handler.setFormatter(
        PlatsyncFormatter(
            include_timestamps=config.include_timestamps,
            include_thread_info=config.include_thread_info,
            sanitize_sensitive=config.sanitize_sensitive_data,
            sensitive_keys=config.sensitive_keys,
        )
    )
    root_logger.addHandler(file_handler)

    if config.console_level != LogLevel.ERROR or config.default_level == LogLevel.DEBUG:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.console_level.value))
        console_handler.setFormatter(
            PlatsyncFormatter(
                include_timestamps=False,
                sanitize_sensitive=config.sanitize_sensitive_data,
                sensitive_keys=config.sensitive_keys,
            )
        )
        root_logger.addHandler(console_handler)

    # API records carry extra fields and get their own formatter
    api_logger = logging.getLogger("platsync.api")
    api_logger.setLevel(logging.DEBUG)
    api_logger.handlers.clear()
    api_logger.propagate = False
    if config.log_api_calls:
        api_handler = logging.handlers.TimedRotatingFileHandler(
            filename=log_file_path,
            when="midnight",
            backupCount=config.log_retention_days,
            encoding="utf-8",
        )
        api_handler.suffix = "%Y-%m-%d"
        api_handler.setFormatter(
            APICallFormatter(
                sanitize_sensitive=config.sanitize_sensitive_data,
                sensitive_keys=config.sensitive_keys,
            )
        )
        api_logger.addHandler(api_handler)

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError:
        pass

    _logging_configured = True
    get_logger("platsync.setup").info(
        f"Logging initialized - File: {log_file_path}, Level: {config.default_level.value}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g. 'platsync.settings.auth')
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


def log_api_call(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    request_headers: Optional[Dict[str, str]] = None,
    error: Optional[str] = None,
    logger_name: str = "platsync.api",
) -> None:
    """
    Log an API call with structured information.

    Server errors and transport failures are logged at ERROR, client
    errors at WARNING, everything else at DEBUG.
    """
    logger = get_logger(logger_name)
    extra: Dict[str, Any] = {
        "api_method": method,
        "api_url": url,
        "api_status": status_code,
        "api_duration": duration or 0,
    }
    if request_headers:
        extra["api_request_headers"] = request_headers
    if error:
        extra["api_error"] = error

    if error and (status_code is None or status_code >= 500):
        logger.error("API call failed", extra=extra)
    elif status_code and 400 <= status_code < 500:
        logger.warning("API call client error", extra=extra)
    else:
        logger.debug("API call completed", extra=extra)


def log_authentication_event(
    event: str,
    success: bool,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "platsync.auth",
) -> None:
    """
    Log a credential exchange or invalidation event.

    Details are always sanitized.
    """
    logger = get_logger(logger_name)
    extra: Dict[str, Any] = {"auth_event": event, "auth_success": success}
    if details:
        extra["auth_details"] = sanitize_data(details, SENSITIVE_KEYS)

    if success:
        logger.info(f"Credential event: {event}", extra=extra)
    else:
        logger.error(f"Credential event failed: {event}", extra=extra)
