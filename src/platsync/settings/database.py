"""
PostgreSQL settings.
"""

from dataclasses import dataclass

from .base import SubdomainReconciler
from .fields import BOOL, INT, STRING, setting


@dataclass
class DatabaseConfig:
    effective_cache_size: object = setting(
        STRING, "Amount of memory available for disk caching by the OS and within the database itself"
    )
    logical_decoding_work_mem: object = setting(STRING, "Memory used for logical decoding")
    maintenance_work_mem: object = setting(
        STRING, "Maximum amount of memory to be used by maintenance operations"
    )
    max_connections: object = setting(
        INT, "Maximum number of concurrent connections to the database server"
    )
    max_locks_per_transaction: object = setting(INT, "Maximum number of locks per transaction")
    max_parallel_maintenance_workers: object = setting(
        INT, "Maximum number of parallel maintenance workers"
    )
    max_parallel_workers: object = setting(INT, "Maximum number of parallel worker processes")
    max_parallel_workers_per_gather: object = setting(
        INT, "Maximum number of parallel workers per Gather node"
    )
    max_replication_slots: object = setting(INT, "Maximum number of replication slots")
    max_slot_wal_keep_size: object = setting(
        STRING, "Maximum size of WAL files that replication slots are allowed to retain"
    )
    max_standby_archive_delay: object = setting(
        STRING, "Maximum delay before canceling queries while a standby processes archived WAL"
    )
    max_standby_streaming_delay: object = setting(
        STRING, "Maximum delay before canceling queries while a standby processes streamed WAL"
    )
    max_wal_senders: object = setting(INT, "Maximum number of WAL sender processes")
    max_wal_size: object = setting(
        STRING, "Maximum size to let the WAL grow during automatic checkpoints"
    )
    max_worker_processes: object = setting(INT, "Maximum number of background worker processes")
    # Request-only; the API never echoes it back
    restart_database: object = setting(
        BOOL, "Whether to restart the database to apply configuration changes", write_only=True
    )
    session_replication_role: object = setting(
        STRING, "Controls firing of replication-related triggers and rules (origin, replica, local)"
    )
    shared_buffers: object = setting(
        STRING, "Amount of memory the database server uses for shared memory buffers"
    )
    statement_timeout: object = setting(STRING, "Maximum allowed duration of any statement")
    track_commit_timestamp: object = setting(
        BOOL, "Whether to track commit time stamps of transactions"
    )
    wal_keep_size: object = setting(STRING, "Minimum size to retain in the pg_wal directory")
    wal_sender_timeout: object = setting(STRING, "Maximum time to wait for WAL replication")
    work_mem: object = setting(
        STRING, "Amount of memory to be used by internal sort operations and hash tables"
    )


class DatabaseReconciler(SubdomainReconciler):
    name = "database"
    attribute = "database"
    config_class = DatabaseConfig
    read_path = "config/database/postgres"
    write_path = "config/database/postgres"
    write_method = "PUT"
