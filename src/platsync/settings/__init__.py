"""
Project settings reconciliation.

- fields / document: field presence and generic document traversal
- base: SubdomainReconciler and ReconcileContext
- database, network, api_gateway, auth, storage, pooler: the six sub-domains
- models: the aggregate SettingsModel
- resource: SettingsResource lifecycle (create/read/update/delete/import)
- drift: comparison of declared and remote settings
"""

from .diagnostics import Diagnostic, Diagnostics, Severity
from .drift import DriftReport, detect_drift
from .models import SettingsModel, settings_schema
from .resource import ReconcileResult, SettingsResource

__all__ = [
    "Diagnostic",
    "Diagnostics",
    "Severity",
    "DriftReport",
    "detect_drift",
    "SettingsModel",
    "settings_schema",
    "ReconcileResult",
    "SettingsResource",
]
