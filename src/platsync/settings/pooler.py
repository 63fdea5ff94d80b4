"""
Connection pooler settings.
"""

from dataclasses import dataclass
from typing import Any, Dict

from platsync.exceptions import RemoteStateError
from .base import SubdomainReconciler
from .fields import INT, setting


@dataclass
class PoolerConfig:
    default_pool_size: object = setting(INT, "Default connection pool size")


class PoolerReconciler(SubdomainReconciler):
    name = "pooler"
    attribute = "pooler"
    config_class = PoolerConfig
    read_path = "config/database/pooler"
    write_path = "config/database/pooler"

    def extract_payload(self, payload: Any) -> Dict[str, Any]:
        # One entry per pooler mode; the first one carries the shared pool size
        if isinstance(payload, list):
            if not payload:
                return {}
            payload = payload[0]
        if not isinstance(payload, dict):
            raise RemoteStateError(
                "Unexpected pooler settings response", status_code=200, body=str(payload)
            )
        return payload
