"""
Drift detection between declared and remote settings.

Only declared settings are compared; write-only settings are skipped since
the remote never reports them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from deepdiff import DeepDiff

from .diagnostics import Diagnostics
from .document import iter_declared
from .models import SUBDOMAIN_CLASSES, SettingsModel


class DriftType(Enum):
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass
class DriftItem:
    """One declared setting compared with its remote value"""

    subdomain: str
    path: str
    drift_type: DriftType
    declared: Any
    remote: Any
    summary: str = ""
    detailed_changes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DriftReport:
    project_ref: str
    modified: List[DriftItem] = field(default_factory=list)
    unchanged: List[DriftItem] = field(default_factory=list)
    skipped_write_only: List[str] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def has_drift(self) -> bool:
        return bool(self.modified)


def _flatten(doc) -> Dict[str, Any]:
    return {path: raw for path, raw, _ in iter_declared(doc)}


def _change_summary(diff: DeepDiff) -> str:
    """Human-readable summary of one setting's changes"""
    parts = []
    if "values_changed" in diff or "type_changes" in diff:
        parts.append("value changed")
    if "iterable_item_added" in diff:
        count = len(diff["iterable_item_added"])
        parts.append(f"{count} item{'s' if count != 1 else ''} only on remote")
    if "iterable_item_removed" in diff:
        count = len(diff["iterable_item_removed"])
        parts.append(f"{count} item{'s' if count != 1 else ''} missing on remote")
    return ", ".join(parts) if parts else "changed"


def detect_drift(declared: SettingsModel, remote: SettingsModel) -> DriftReport:
    """
    Compare every declared setting of declared with remote.

    remote is expected to be declared refreshed through a normal read, so
    it holds the same declared paths with remote values.
    """
    report = DriftReport(project_ref=declared.project_ref or declared.id)

    for name in SUBDOMAIN_CLASSES:
        declared_doc = getattr(declared, name)
        if declared_doc is None:
            continue
        remote_doc = getattr(remote, name) if remote is not None else None
        remote_values = _flatten(remote_doc) if remote_doc is not None else {}

        for path, value, write_only in iter_declared(declared_doc):
            qualified = f"{name}.{path}"
            if write_only:
                report.skipped_write_only.append(qualified)
                continue

            remote_value = remote_values.get(path)
            diff = DeepDiff(value, remote_value, ignore_order=True, verbose_level=2)
            if diff:
                report.modified.append(
                    DriftItem(
                        subdomain=name,
                        path=qualified,
                        drift_type=DriftType.MODIFIED,
                        declared=value,
                        remote=remote_value,
                        summary=_change_summary(diff),
                        detailed_changes=diff.to_dict(),
                    )
                )
            else:
                report.unchanged.append(
                    DriftItem(name, qualified, DriftType.UNCHANGED, value, remote_value)
                )

    return report
