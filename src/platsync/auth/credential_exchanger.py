"""
Credential exchange.

Trades the long-lived management access token for a project's role-scoped
API secret by listing the project's API keys with secrets revealed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import time

from platsync.api.client import ManagementClient
from platsync.constants import ANON_KEY_NAME, SERVICE_ROLE_KEY_NAME
from platsync.exceptions import NotFoundError
from platsync.logging import get_logger, log_authentication_event


@dataclass
class ProjectCredentials:
    """Secrets derived for one project, with the time they were fetched"""

    project_ref: str
    service_role_key: str
    anon_key: Optional[str] = None
    cached_at: float = field(default_factory=time.monotonic)

    def __repr__(self) -> str:
        # Keep secrets out of tracebacks and log lines
        return (
            f"ProjectCredentials(project_ref={self.project_ref!r}, "
            f"service_role_key='***', anon_key={'***' if self.anon_key else None}, "
            f"cached_at={self.cached_at})"
        )


def _key_secret(entry: Dict[str, Any]) -> Optional[str]:
    return entry.get("api_key") or entry.get("secret")


class CredentialExchanger:
    """Fetches project API secrets from the management key-listing endpoint"""

    def __init__(
        self,
        client: ManagementClient,
        role_key_name: str = SERVICE_ROLE_KEY_NAME,
        anon_key_name: str = ANON_KEY_NAME,
    ):
        self.client = client
        self.role_key_name = role_key_name
        self.anon_key_name = anon_key_name
        self.logger = get_logger("platsync.auth.credential_exchanger")

    def exchange(self, project_ref: str) -> ProjectCredentials:
        """
        Exchange the management token for the project's role and anon secrets.

        Raises:
            NetworkError, AuthError, RemoteStateError: from the key listing call
            NotFoundError: the project has no keys, or no role-scoped key
        """
        self.logger.debug(f"Exchanging management token for project {project_ref}")

        keys: List[Dict[str, Any]] = self.client.list_api_keys(project_ref, reveal=True)
        if not keys:
            log_authentication_event("exchange", False, {"project_ref": project_ref})
            raise NotFoundError(f"no API keys found for project {project_ref}")

        role_secret = None
        anon_secret = None
        for entry in keys:
            name = entry.get("name")
            if name == self.role_key_name:
                role_secret = _key_secret(entry)
            elif name == self.anon_key_name:
                anon_secret = _key_secret(entry)

        if not role_secret:
            log_authentication_event("exchange", False, {"project_ref": project_ref})
            raise NotFoundError(
                f"{self.role_key_name} key not found for project {project_ref}"
            )

        log_authentication_event("exchange", True, {"project_ref": project_ref})
        return ProjectCredentials(
            project_ref=project_ref,
            service_role_key=role_secret,
            anon_key=anon_secret,
        )
