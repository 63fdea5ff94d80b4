"""Shared pytest configuration and fixtures for the platsync test suite.

This module provides:
- A fake management API built on httpx.MockTransport
- Management clients and settings resources wired to it
- Logging redirected to a temporary directory
"""
import json
import sys
from pathlib import Path

import httpx
import pytest


# Add src/ to path so test modules can import platsync package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from platsync.logging import LogConfig, setup_logging  # noqa: E402


class FakeManagementAPI:
    """In-memory stand-in for the management API.

    Routes map (METHOD, path) to (status, json payload). Every request is
    recorded so tests can assert on what was sent.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, payload=None, status=200):
        self.routes[(method.upper(), path)] = (status, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append(
            {
                "method": request.method,
                "path": request.url.path,
                "params": dict(request.url.params),
                "headers": dict(request.headers),
                "json": body,
            }
        )
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "not found"})
        status, payload = route
        if isinstance(payload, Exception):
            raise payload
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)

    def writes(self):
        return [r for r in self.requests if r["method"] != "GET"]

    def sent(self, method, path):
        """Bodies sent with method to path"""
        return [r["json"] for r in self.requests if r["method"] == method and r["path"] == path]


@pytest.fixture(autouse=True, scope="session")
def isolated_logging(tmp_path_factory):
    """Send log output to a temporary directory for the whole session."""
    log_dir = tmp_path_factory.mktemp("logs")
    setup_logging(LogConfig(log_directory=log_dir), force_reconfigure=True)
    return log_dir


@pytest.fixture
def fake_api():
    return FakeManagementAPI()


@pytest.fixture
def management_client(fake_api):
    from platsync.api.client import ManagementClient

    return ManagementClient(
        "sbp_test_token", base_url="https://api.test", transport=fake_api.transport
    )


@pytest.fixture
def settings_resource(management_client):
    from platsync.settings import SettingsResource

    return SettingsResource(management_client)


@pytest.fixture
def project_ref():
    return "abcdefghijklmnop"


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)
