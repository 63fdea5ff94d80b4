import json
import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

import keyring
from keyring.errors import KeyringError

from platsync.constants import (
    ACCESS_TOKEN_ENV_VAR,
    DEFAULT_API_URL,
    DEFAULT_DATA_PLANE_URL,
    KEYRING_SERVICE,
)

ACCESS_TOKEN_USERNAME = "access_token"


class ConfigStore:
    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir or self._get_config_dir()
        self.settings_file = self.base_dir / "settings.json"
        self._ensure_config_dir()

    def _get_config_dir(self) -> Path:
        """Get platform-specific config directory"""
        system = platform.system()
        if system == "Windows":
            appdata = os.environ.get("APPDATA")
            return (Path(appdata) if appdata else Path.home()) / "platsync"
        elif system == "Darwin":
            return Path.home() / "Library" / "Application Support" / "platsync"
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "platsync"
        return Path.home() / ".platsync"

    def _ensure_config_dir(self):
        os.makedirs(self.base_dir / "projects", exist_ok=True)

    def get_project_dir(self, project_ref: str) -> Path:
        """Get project-specific directory"""
        project_dir = self.base_dir / "projects" / project_ref
        os.makedirs(project_dir, exist_ok=True)
        return project_dir

    # Global settings

    def get_settings(self) -> Dict[str, Any]:
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}

    def update_settings(self, **values: Any) -> Dict[str, Any]:
        """Merge values into settings.json and return the result"""
        settings = self.get_settings()
        settings.update({k: v for k, v in values.items() if v is not None})
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
        return settings

    def get_api_url(self) -> str:
        return self.get_settings().get("api_url") or DEFAULT_API_URL

    def get_data_plane_url(self) -> str:
        return self.get_settings().get("data_plane_url") or DEFAULT_DATA_PLANE_URL

    # Management access token

    def save_access_token(self, token: str) -> None:
        """Store the management access token in the OS keyring"""
        keyring.set_password(KEYRING_SERVICE, ACCESS_TOKEN_USERNAME, token)

    def get_access_token(self) -> Optional[str]:
        """Environment variable first, then the keyring"""
        env_token = os.environ.get(ACCESS_TOKEN_ENV_VAR)
        if env_token:
            return env_token
        try:
            return keyring.get_password(KEYRING_SERVICE, ACCESS_TOKEN_USERNAME)
        except KeyringError:
            return None

    def delete_access_token(self) -> None:
        try:
            keyring.delete_password(KEYRING_SERVICE, ACCESS_TOKEN_USERNAME)
        except KeyringError:
            pass

    # Tracked settings state

    def _state_file(self, project_ref: str) -> Path:
        return self.get_project_dir(project_ref) / "settings_state.json"

    def save_state(self, project_ref: str, state: Dict[str, Any]) -> None:
        """Persist tracked settings state for a project"""
        with open(self._state_file(project_ref), "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2, sort_keys=True)

    def get_state(self, project_ref: str) -> Optional[Dict[str, Any]]:
        state_file = self._state_file(project_ref)
        if not state_file.exists():
            return None
        try:
            with open(state_file, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return None

    def delete_state(self, project_ref: str) -> bool:
        """Remove tracked state; returns False if nothing was tracked"""
        state_file = self._state_file(project_ref)
        if not state_file.exists():
            return False
        state_file.unlink()
        return True
