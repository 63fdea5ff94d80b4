"""
PostgREST (API gateway) settings.
"""

from dataclasses import dataclass

from .base import SubdomainReconciler
from .fields import INT, STRING, setting


@dataclass
class ApiConfig:
    db_extra_search_path: object = setting(STRING, "Extra search path for database schemas")
    db_pool: object = setting(INT, "Database connection pool size")
    db_schema: object = setting(STRING, "Database schemas to expose via PostgREST")
    max_rows: object = setting(INT, "Maximum number of rows returned in a single request")


class ApiReconciler(SubdomainReconciler):
    name = "api"
    attribute = "api"
    config_class = ApiConfig
    read_path = "postgrest"
    write_path = "postgrest"
