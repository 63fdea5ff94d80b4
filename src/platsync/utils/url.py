"""
URL construction utilities for the management and data-plane APIs.
"""

from platsync.constants import DEFAULT_DATA_PLANE_URL


def construct_api_url(base_url: str, endpoint: str) -> str:
    """
    Join a base URL and an endpoint without doubling or dropping slashes.

    A base URL that already carries the /v1 prefix is accepted; the
    prefix is not repeated when the endpoint starts with it.
    """
    base_url = base_url.rstrip("/")
    endpoint = endpoint or ""

    if not endpoint.startswith("/"):
        endpoint = "/" + endpoint

    if base_url.endswith("/v1") and endpoint.startswith("/v1/"):
        endpoint = endpoint[3:]

    return f"{base_url}{endpoint}"


def project_endpoint(project_ref: str, suffix: str) -> str:
    """Build a /v1/projects/{ref}/... endpoint path"""
    if not project_ref:
        raise ValueError("Project reference is required")
    suffix = suffix.lstrip("/")
    return f"/v1/projects/{project_ref}/{suffix}"


def data_plane_base_url(project_ref: str, template: str = DEFAULT_DATA_PLANE_URL) -> str:
    """Resolve the data-plane base URL for a project from a {project_ref} template"""
    if not project_ref:
        raise ValueError("Project reference is required")
    return template.format(project_ref=project_ref).rstrip("/")
