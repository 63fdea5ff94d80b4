"""
Management API client.

A thin httpx wrapper used by the credential exchanger and every settings
reconciler. It logs each call, and maps transport failures and non-2xx
responses onto the platsync error taxonomy.
"""

import json
import time
from typing import Any, Dict, Iterable, List, Optional

import httpx

from platsync.constants import (
    AUTH_FAILURE_STATUS_CODES,
    DEFAULT_API_URL,
    DEFAULT_HEADERS,
    DEFAULT_HTTP_TIMEOUT,
)
from platsync.exceptions import AuthError, NetworkError, RemoteStateError
from platsync.logging import get_logger, log_api_call
from platsync.utils.url import construct_api_url, project_endpoint


def extract_error_message(response: httpx.Response) -> str:
    """Pull the most useful message out of an error body, falling back to the raw text"""
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict):
        for key in ("message", "error", "msg", "error_description"):
            if payload.get(key):
                return str(payload[key])
    return response.text


def decode_json(response: httpx.Response) -> Any:
    """Decode a JSON body; an empty body decodes to an empty dict"""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError as e:
        raise RemoteStateError(
            f"Unable to decode response body: {e}",
            status_code=response.status_code,
            body=response.text,
        ) from e


class ManagementClient:
    """Client for the platform management API, authenticated with the long-lived access token"""

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not access_token:
            raise ValueError("Management access token is required")
        self.base_url = base_url
        self.timeout = timeout
        self._access_token = access_token
        self._transport = transport
        self.logger = get_logger("platsync.api.client")

    def build_headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        headers["Authorization"] = f"Bearer {self._access_token}"
        if extra:
            headers.update(extra)
        return headers

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Any] = None,
        allowed_statuses: Iterable[int] = (),
    ) -> httpx.Response:
        """
        Perform a request against the management API.

        Args:
            method: HTTP method
            endpoint: Path such as /v1/projects/{ref}/config/auth
            params: Query parameters
            json_body: Body serialized as JSON
            allowed_statuses: Non-2xx codes returned to the caller instead of raised

        Raises:
            NetworkError: transport failure or timeout
            AuthError: 401/403 response
            RemoteStateError: any other non-2xx response
        """
        url = construct_api_url(self.base_url, endpoint)
        method_upper = method.upper()
        headers = self.build_headers()
        content = json.dumps(json_body) if json_body is not None else None
        start_time = time.time()

        self.logger.debug(f"Starting {method_upper} request to {url}")

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.request(
                    method_upper, url, headers=headers, params=params, content=content
                )
        except httpx.HTTPError as e:
            log_api_call(
                method=method_upper,
                url=url,
                duration=time.time() - start_time,
                request_headers=headers,
                error=str(e),
            )
            raise NetworkError(f"{method_upper} {url} failed: {e}") from e

        duration = time.time() - start_time
        status = response.status_code

        if response.is_success or status in allowed_statuses:
            log_api_call(
                method=method_upper,
                url=url,
                status_code=status,
                duration=duration,
                request_headers=headers,
            )
            return response

        message = extract_error_message(response)
        clean_error = f"{status} - {message}"
        log_api_call(
            method=method_upper,
            url=url,
            status_code=status,
            duration=duration,
            request_headers=headers,
            error=clean_error,
        )

        if status in AUTH_FAILURE_STATUS_CODES:
            raise AuthError(f"{method_upper} {endpoint} rejected: {clean_error}", status_code=status)
        raise RemoteStateError(
            f"{method_upper} {endpoint} failed with status {clean_error}",
            status_code=status,
            body=response.text,
        )

    def get(self, endpoint: str, **kwargs) -> httpx.Response:
        return self.request("GET", endpoint, **kwargs)

    def list_api_keys(self, project_ref: str, reveal: bool = True) -> List[Dict[str, Any]]:
        """
        List the project's API keys.

        The listing masks secret values unless reveal is set.
        """
        response = self.get(
            project_endpoint(project_ref, "api-keys"),
            params={"reveal": "true" if reveal else "false"},
        )
        keys = decode_json(response)
        if not isinstance(keys, list):
            raise RemoteStateError(
                f"Unexpected API key listing for project {project_ref}",
                status_code=response.status_code,
                body=response.text,
            )
        return keys
