"""
Utility functions for platsync logging.

Sanitization of secrets before they reach a log record, and rotation
cleanup.
"""

import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Tuple

from platsync.constants import LOG_FILE_NAME, LOG_RETENTION_DAYS

_STRING_PATTERNS = [
    (r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", "Bearer ***"),
    (r"([?&](?:token|key|secret|password|apikey)=)[^&\s]+", r"\1***"),
    (r"eyJ[A-Za-z0-9\-_]+=*\.eyJ[A-Za-z0-9\-_]+=*\.[A-Za-z0-9\-_.+/]+=*", "***JWT***"),
]


def mask_secret(value: str) -> str:
    """Show the first and last four characters of long secrets, nothing of short ones"""
    if len(value) > 8:
        return f"{value[:4]}...{value[-4:]}"
    return "***"


def sanitize_data(data: Any, sensitive_keys: Tuple[str, ...]) -> Any:
    """
    Recursively sanitize sensitive data in dictionaries, lists and strings.

    Args:
        data: Data to sanitize
        sensitive_keys: Key fragments whose values must be masked

    Returns:
        A sanitized copy of data
    """
    if isinstance(data, dict):
        return _sanitize_dict(data, sensitive_keys)
    if isinstance(data, list):
        return [sanitize_data(item, sensitive_keys) for item in data]
    if isinstance(data, str):
        return sanitize_string(data)
    return data


def _sanitize_dict(data: Dict[str, Any], sensitive_keys: Tuple[str, ...]) -> Dict[str, Any]:
    sanitized = {}
    for key, value in data.items():
        key_lower = str(key).lower()
        if any(sensitive in key_lower for sensitive in sensitive_keys):
            sanitized[key] = mask_secret(value) if isinstance(value, str) and value else "***"
        else:
            sanitized[key] = sanitize_data(value, sensitive_keys)
    return sanitized


def sanitize_string(data: str) -> str:
    """Mask bearer tokens, JWTs and secret query parameters inside free text"""
    sanitized = data
    for pattern, replacement in _STRING_PATTERNS:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)
    return sanitized


def cleanup_old_logs(log_directory: Path, retention_days: int = LOG_RETENTION_DAYS) -> int:
    """
    Delete rotated log files older than the retention window.

    Returns:
        Number of files removed
    """
    if not log_directory.exists():
        return 0

    cutoff = (datetime.now() - timedelta(days=retention_days)).timestamp()
    removed: List[Path] = []

    for log_file in log_directory.glob(f"{LOG_FILE_NAME}.log.*"):
        try:
            if log_file.stat().st_mtime < cutoff:
                log_file.unlink()
                removed.append(log_file)
        except OSError:
            continue

    return len(removed)
