"""
In-memory cache of derived project credentials.

One cache is constructed per provider instance and handed to every
component that calls the data-plane API. Entries expire after a fixed
freshness window and are evicted explicitly when a data-plane call is
rejected.
"""

import threading
import time
from typing import Callable, Dict, Optional

from platsync.constants import CREDENTIAL_FRESHNESS_SECONDS
from platsync.logging import get_logger, log_authentication_event
from .credential_exchanger import CredentialExchanger, ProjectCredentials


class CredentialCache:
    """
    Thread-safe cache keyed by project reference.

    Cache hits only hold the map lock long enough to read the dict, so
    lookups for different projects never wait on each other. A miss takes
    a per-project refresh lock, so concurrent misses for the same project
    trigger a single exchange while other projects proceed unblocked.
    """

    def __init__(
        self,
        exchanger: CredentialExchanger,
        freshness_seconds: float = CREDENTIAL_FRESHNESS_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.exchanger = exchanger
        self.freshness_seconds = freshness_seconds
        self._clock = clock
        self._entries: Dict[str, ProjectCredentials] = {}
        self._refresh_locks: Dict[str, threading.Lock] = {}
        self._map_lock = threading.Lock()
        self.logger = get_logger("platsync.auth.credential_cache")

    def _refresh_lock(self, project_ref: str) -> threading.Lock:
        with self._map_lock:
            lock = self._refresh_locks.get(project_ref)
            if lock is None:
                lock = threading.Lock()
                self._refresh_locks[project_ref] = lock
            return lock

    def _fresh_entry(self, project_ref: str) -> Optional[ProjectCredentials]:
        with self._map_lock:
            entry = self._entries.get(project_ref)
        if entry is None or not entry.service_role_key:
            return None
        if self._clock() - entry.cached_at >= self.freshness_seconds:
            return None
        return entry

    def get_credentials(self, project_ref: str) -> ProjectCredentials:
        """
        Return the project's credentials, exchanging on a miss or stale entry.

        Raises whatever the exchanger raises; nothing is cached on failure.
        """
        entry = self._fresh_entry(project_ref)
        if entry is not None:
            self.logger.debug(f"Using cached credentials for {project_ref}")
            return entry

        while True:
            lock = self._refresh_lock(project_ref)
            with lock:
                # invalidate() may have released this lock before we acquired it
                with self._map_lock:
                    if self._refresh_locks.get(project_ref) is not lock:
                        continue

                # Another thread may have refreshed while we waited
                entry = self._fresh_entry(project_ref)
                if entry is not None:
                    return entry

                self.logger.info(f"Refreshing credentials for project: {project_ref}")
                credentials = self.exchanger.exchange(project_ref)
                credentials.cached_at = self._clock()
                with self._map_lock:
                    self._entries[project_ref] = credentials
                return credentials

    def get(self, project_ref: str) -> str:
        """Return the role-scoped secret for the project"""
        return self.get_credentials(project_ref).service_role_key

    def invalidate(self, project_ref: str) -> None:
        """
        Evict the project's entry so the next get() exchanges again.

        The project's refresh lock is released too unless a refresh holds it.
        """
        with self._map_lock:
            removed = self._entries.pop(project_ref, None)
            lock = self._refresh_locks.get(project_ref)
            if lock is not None and not lock.locked():
                del self._refresh_locks[project_ref]
        if removed is not None:
            log_authentication_event("invalidate", True, {"project_ref": project_ref})

    def __contains__(self, project_ref: str) -> bool:
        return self._fresh_entry(project_ref) is not None

    def __len__(self) -> int:
        with self._map_lock:
            return len(self._entries)
