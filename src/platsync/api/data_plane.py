"""
Data-plane API client.

The per-project data-plane API does not accept the management token; it
expects the project's role-scoped secret as a Bearer token. Secrets come
from a CredentialCache, and a 401/403 response evicts the cached secret
before the error is raised. Retrying is left to the caller.
"""

import json
import time
from typing import Any, Dict, Optional

import httpx

from platsync.auth.credential_cache import CredentialCache
from platsync.constants import (
    AUTH_FAILURE_STATUS_CODES,
    DEFAULT_DATA_PLANE_URL,
    DEFAULT_HEADERS,
    DEFAULT_HTTP_TIMEOUT,
)
from platsync.exceptions import AuthError, NetworkError, RemoteStateError
from platsync.logging import get_logger, log_api_call
from platsync.utils.url import construct_api_url, data_plane_base_url
from .client import decode_json, extract_error_message


class DataPlaneClient:
    """Calls a project's data-plane API with a derived credential"""

    def __init__(
        self,
        credentials: CredentialCache,
        url_template: str = DEFAULT_DATA_PLANE_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.credentials = credentials
        self.url_template = url_template
        self.timeout = timeout
        self._transport = transport
        self.logger = get_logger("platsync.api.data_plane")

    def request(
        self,
        project_ref: str,
        method: str,
        path: str,
        json_body: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Perform an authenticated data-plane request.

        Raises:
            NetworkError: transport failure
            AuthError: 401/403; the cached credential has been invalidated
            RemoteStateError: any other non-2xx response
        """
        secret = self.credentials.get(project_ref)
        url = construct_api_url(data_plane_base_url(project_ref, self.url_template), path)
        method_upper = method.upper()
        headers = dict(DEFAULT_HEADERS)
        headers["Authorization"] = f"Bearer {secret}"
        headers["apikey"] = secret
        content = json.dumps(json_body) if json_body is not None else None
        start_time = time.time()

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.request(
                    method_upper, url, headers=headers, params=params, content=content
                )
        except httpx.HTTPError as e:
            log_api_call(method_upper, url, duration=time.time() - start_time, error=str(e))
            raise NetworkError(f"{method_upper} {url} failed: {e}") from e

        duration = time.time() - start_time
        status = response.status_code

        if response.is_success:
            log_api_call(method_upper, url, status_code=status, duration=duration)
            return response

        clean_error = f"{status} - {extract_error_message(response)}"
        log_api_call(method_upper, url, status_code=status, duration=duration, error=clean_error)

        if status in AUTH_FAILURE_STATUS_CODES:
            self.logger.warning(
                f"Data-plane rejected credentials for {project_ref}; invalidating cached secret"
            )
            self.credentials.invalidate(project_ref)
            raise AuthError(f"{method_upper} {path} rejected: {clean_error}", status_code=status)

        raise RemoteStateError(
            f"{method_upper} {path} failed with status {clean_error}",
            status_code=status,
            body=response.text,
        )

    def get_json(self, project_ref: str, path: str, **kwargs) -> Any:
        return decode_json(self.request(project_ref, "GET", path, **kwargs))

    def check_access(self, project_ref: str, path: str = "/storage/v1/bucket") -> bool:
        """Probe the data-plane with the derived credential; True when it is accepted"""
        self.request(project_ref, "GET", path)
        return True
