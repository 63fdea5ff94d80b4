"""
Aggregate settings lifecycle.

SettingsResource drives the six sub-domain reconcilers through
create/read/update/delete/import. Sub-domains are processed in a fixed
order, every one is attempted even after another failed, and their
diagnostics are aggregated into one ReconcileResult.
"""

import copy
from dataclasses import dataclass, field
from typing import List, Optional

from platsync.api.client import ManagementClient
from platsync.logging import get_logger
from .api_gateway import ApiReconciler
from .auth import AuthReconciler
from .base import ReconcileContext, SubdomainReconciler
from .database import DatabaseReconciler
from .diagnostics import Diagnostics
from .drift import DriftReport, detect_drift
from .models import SUBDOMAIN_CLASSES, SettingsModel
from .network import NetworkReconciler
from .pooler import PoolerReconciler
from .storage import StorageReconciler


def default_reconcilers() -> List[SubdomainReconciler]:
    return [
        DatabaseReconciler(),
        NetworkReconciler(),
        ApiReconciler(),
        AuthReconciler(),
        StorageReconciler(),
        PoolerReconciler(),
    ]


@dataclass
class ReconcileResult:
    state: Optional[SettingsModel]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def has_error(self) -> bool:
        return self.diagnostics.has_error()


class SettingsResource:
    """Project-wide settings managed as one resource"""

    def __init__(
        self,
        client: ManagementClient,
        reconcilers: Optional[List[SubdomainReconciler]] = None,
    ):
        self.client = client
        self.reconcilers = reconcilers if reconcilers is not None else default_reconcilers()
        self.logger = get_logger("platsync.settings.resource")

    def _apply(self, plan: SettingsModel, operation: str) -> ReconcileResult:
        plan = copy.deepcopy(plan)
        diagnostics = Diagnostics()

        if not plan.project_ref:
            diagnostics.add_error("Missing project reference", "project_ref is required")
            return ReconcileResult(plan, diagnostics)

        ctx = ReconcileContext(self.client)
        self.logger.info(
            f"{operation.capitalize()} settings for {plan.project_ref}: "
            f"{', '.join(plan.managed_subdomains()) or 'nothing declared'}"
        )
        for reconciler in self.reconcilers:
            if getattr(plan, reconciler.attribute) is not None:
                diagnostics.extend(reconciler.update(ctx, plan))

        if diagnostics.has_error():
            self.logger.error(
                f"{operation.capitalize()} failed for {plan.project_ref}: "
                f"{len(diagnostics.errors())} error(s)"
            )
        else:
            plan.id = plan.project_ref
        return ReconcileResult(plan, diagnostics)

    def create(self, plan: SettingsModel) -> ReconcileResult:
        """Push every declared setting; on success the state is tracked under project_ref"""
        return self._apply(plan, "create")

    def update(self, plan: SettingsModel) -> ReconcileResult:
        return self._apply(plan, "update")

    def read(self, state: SettingsModel) -> ReconcileResult:
        """Refresh every managed sub-domain of the tracked state"""
        state = copy.deepcopy(state)
        diagnostics = Diagnostics()

        if not (state.id or state.project_ref):
            diagnostics.add_error("Missing project reference", "state has no project id")
            return ReconcileResult(state, diagnostics)

        ctx = ReconcileContext(self.client)
        for reconciler in self.reconcilers:
            if getattr(state, reconciler.attribute) is not None:
                diagnostics.extend(reconciler.read(ctx, state))

        if not diagnostics.has_error():
            state.project_ref = state.id or state.project_ref
        return ReconcileResult(state, diagnostics)

    def delete(self, state: SettingsModel) -> ReconcileResult:
        """
        Stop tracking the settings.

        There is no API to reset project settings to their defaults, so
        nothing is sent to the remote.
        """
        self.logger.info(
            f"Settings for {state.id or state.project_ref} are no longer managed; "
            "remote values are left unchanged"
        )
        return ReconcileResult(None)

    def import_state(self, project_ref: str) -> ReconcileResult:
        """
        Bootstrap tracked state from an existing project.

        Every sub-domain is read with undeclared settings filled from the
        remote. Sub-domains that are not configured stay unmanaged.
        """
        state = SettingsModel(project_ref=project_ref, id=project_ref)
        diagnostics = Diagnostics()

        if not project_ref:
            diagnostics.add_error("Missing project reference", "a project reference is required")
            return ReconcileResult(state, diagnostics)

        for name, config_class in SUBDOMAIN_CLASSES.items():
            setattr(state, name, config_class())

        ctx = ReconcileContext(self.client, populate=True)
        for reconciler in self.reconcilers:
            diagnostics.extend(reconciler.read(ctx, state))

        self.logger.info(
            f"Imported settings for {project_ref}: "
            f"{', '.join(state.managed_subdomains()) or 'none configured'}"
        )
        return ReconcileResult(state, diagnostics)

    def diff(self, plan: SettingsModel) -> DriftReport:
        """Compare the declared settings with the remote values"""
        current = copy.deepcopy(plan)
        current.id = current.id or current.project_ref
        result = self.read(current)
        report = detect_drift(plan, result.state)
        report.diagnostics.extend(result.diagnostics)
        return report
