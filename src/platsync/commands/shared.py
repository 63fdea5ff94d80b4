"""
Helpers shared by the settings and credentials commands.
"""

import json
from pathlib import Path
from typing import Any, Dict

import typer

from platsync.api.client import ManagementClient
from platsync.constants import ACCESS_TOKEN_ENV_VAR
from platsync.utils.config_store import ConfigStore
from platsync.utils.console import error


def project_option():
    return typer.Option(..., "--project", "-p", help="Project reference")


def build_management_client(config_store: ConfigStore) -> ManagementClient:
    """Management client from the stored token; exits when none is configured"""
    token = config_store.get_access_token()
    if not token:
        error(
            "No access token configured. Run 'platsync config set-token' "
            f"or set {ACCESS_TOKEN_ENV_VAR}"
        )
        raise typer.Exit(1)
    return ManagementClient(token, base_url=config_store.get_api_url())


def load_settings_file(path: Path) -> Dict[str, Any]:
    """Read a JSON settings document; exits on unreadable or invalid files"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        error(f"Settings file not found: {path}")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        error(f"Invalid JSON in {path}: {e}")
        raise typer.Exit(1)
    if not isinstance(data, dict):
        error(f"Settings file must contain a JSON object: {path}")
        raise typer.Exit(1)
    return data
