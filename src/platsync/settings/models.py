"""
Aggregate settings model.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from platsync.exceptions import ValidationError
from .api_gateway import ApiConfig
from .auth import AuthConfig
from .database import DatabaseConfig
from .document import document_from_dict, document_to_dict, schema_attributes
from .network import NetworkConfig
from .pooler import PoolerConfig
from .storage import StorageConfig

SUBDOMAIN_CLASSES = {
    "database": DatabaseConfig,
    "network": NetworkConfig,
    "api": ApiConfig,
    "auth": AuthConfig,
    "storage": StorageConfig,
    "pooler": PoolerConfig,
}

SUBDOMAIN_DESCRIPTIONS = {
    "database": "Database settings",
    "network": "Network restrictions settings",
    "api": "API settings",
    "auth": "Auth settings",
    "storage": "Storage configuration settings",
    "pooler": "Connection pooler settings",
}


@dataclass
class SettingsModel:
    """
    Desired or tracked settings of one project.

    A sub-document left as None is not managed: it is never read, written
    or diffed.
    """

    project_ref: Optional[str] = None
    id: Optional[str] = None
    database: Optional[DatabaseConfig] = None
    network: Optional[NetworkConfig] = None
    api: Optional[ApiConfig] = None
    auth: Optional[AuthConfig] = None
    storage: Optional[StorageConfig] = None
    pooler: Optional[PoolerConfig] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], project_ref: Optional[str] = None) -> "SettingsModel":
        """
        Build a model from a settings file or saved state.

        Raises:
            ValidationError: malformed document
        """
        if not isinstance(data, dict):
            raise ValidationError("Settings document must be a JSON object")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(f"Unknown settings sections: {', '.join(unknown)}")

        model = cls(
            project_ref=project_ref or data.get("project_ref"),
            id=data.get("id"),
        )
        for name, config_class in SUBDOMAIN_CLASSES.items():
            section = data.get(name)
            if section is not None:
                setattr(model, name, document_from_dict(config_class, section, name))
        return model

    def to_dict(self, redact: bool = False) -> Dict[str, Any]:
        """JSON view; with redact, write-only values are masked"""
        data: Dict[str, Any] = {"project_ref": self.project_ref}
        if self.id:
            data["id"] = self.id
        for name in SUBDOMAIN_CLASSES:
            config = getattr(self, name)
            if config is not None:
                data[name] = document_to_dict(config, redact)
        return data

    def managed_subdomains(self):
        return [name for name in SUBDOMAIN_CLASSES if getattr(self, name) is not None]


def settings_schema() -> Dict[str, Dict[str, Any]]:
    """Attribute schema of the whole settings document"""
    attrs: Dict[str, Dict[str, Any]] = {
        "project_ref": {"type": "string", "required": True, "description": "Project reference ID"},
        "id": {"type": "string", "computed": True, "description": "Project identifier"},
    }
    for name, config_class in SUBDOMAIN_CLASSES.items():
        attrs[name] = {
            "type": "object",
            "optional": True,
            "description": SUBDOMAIN_DESCRIPTIONS[name],
            "attributes": schema_attributes(config_class),
        }
    return attrs
