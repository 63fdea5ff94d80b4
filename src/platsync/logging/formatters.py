"""
Custom formatters for platsync logging.

PlatsyncFormatter is used for ordinary records; APICallFormatter renders
the structured records emitted by log_api_call().
"""

import logging
from datetime import datetime
from typing import Optional

from platsync.constants import SENSITIVE_KEYS
from .utils import sanitize_data, sanitize_string


class PlatsyncFormatter(logging.Formatter):
    """
    Formatter for general platsync records.

    Dict/list arguments are sanitized and the rendered message is scrubbed
    of bearer tokens and JWTs.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_thread_info: bool = False,
        sanitize_sensitive: bool = True,
        sensitive_keys: Optional[tuple] = None,
    ):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS

        fmt_parts = ["%(levelname)s", "[%(name)s]", "%(message)s"]
        if include_timestamps:
            fmt_parts.insert(0, "%(asctime)s")
        if include_thread_info:
            fmt_parts.insert(-1, "[Thread:%(threadName)s]")
        super().__init__(fmt=" ".join(fmt_parts), datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        if self.sanitize_sensitive:
            if isinstance(record.msg, (dict, list)):
                record.msg = sanitize_data(record.msg, self.sensitive_keys)
            if isinstance(record.args, tuple):
                record.args = tuple(
                    sanitize_data(arg, self.sensitive_keys) if isinstance(arg, (dict, list)) else arg
                    for arg in record.args
                )
        rendered = super().format(record)
        return sanitize_string(rendered) if self.sanitize_sensitive else rendered


class APICallFormatter(logging.Formatter):
    """
    Formatter for API call records.

    Example:
        2026-10-19 10:12:01 DEBUG [platsync.api] PATCH https://.../config/auth -> 200 (84.1ms)
    """

    def __init__(self, sanitize_sensitive: bool = True, sensitive_keys: Optional[tuple] = None):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        method = getattr(record, "api_method", "UNKNOWN")
        url = getattr(record, "api_url", "")
        status = getattr(record, "api_status", None) or "---"
        duration = round(getattr(record, "api_duration", 0) * 1000, 2)

        lines = [
            f"{timestamp} {record.levelname} [{record.name}] "
            f"{method} {url} -> {status} ({duration}ms)"
        ]

        api_error = getattr(record, "api_error", None)
        if api_error:
            lines.append(f"    Error: {api_error}")

        headers = getattr(record, "api_request_headers", None)
        if headers and record.levelno <= logging.DEBUG:
            if self.sanitize_sensitive:
                headers = sanitize_data(headers, self.sensitive_keys)
            lines.append(f"    Request headers: {headers}")

        text = "\n".join(lines)
        return sanitize_string(text) if self.sanitize_sensitive else text
