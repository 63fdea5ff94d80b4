"""
Base class for sub-domain reconcilers.

Each of the six sub-domains (database, network, api, auth, storage,
pooler) owns one slice of the aggregate settings document and one
read/write endpoint pair. Subclasses declare the slice and endpoints and
override the conversion hooks when the wire shape is not a flat object.
"""

import copy
from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict, Optional

from platsync.api.client import ManagementClient, decode_json
from platsync.constants import NOT_CONFIGURED_STATUS_CODES
from platsync.exceptions import PlatsyncError, RemoteStateError, ValidationError
from platsync.logging import get_logger
from platsync.utils.url import project_endpoint
from .diagnostics import Diagnostics
from .document import build_wire_body, merge_wire


@dataclass
class ReconcileContext:
    """Per-operation context handed to every reconciler"""

    client: ManagementClient
    # Fill undeclared settings from the remote; set during import
    populate: bool = False


def project_ref_of(model, tracked: bool = False) -> Optional[str]:
    """Reads address the tracked id, writes the declared project_ref"""
    if tracked:
        return model.id or model.project_ref
    return model.project_ref or model.id


class SubdomainReconciler(ABC):
    """Reads and updates one sub-domain of the aggregate settings"""

    #: Short name used in diagnostics and logs
    name: str = ""
    #: Attribute of the settings model holding this sub-domain
    attribute: str = ""
    #: Document class for this sub-domain
    config_class: type = object
    #: Endpoint suffixes under /v1/projects/{ref}/
    read_path: str = ""
    write_path: str = ""
    write_method: str = "PATCH"

    def __init__(self):
        self.logger = get_logger(f"platsync.settings.{self.name}")

    # Conversion hooks

    def build_request(self, config) -> Dict[str, Any]:
        """Request body with only the declared settings"""
        return build_wire_body(config)

    def extract_payload(self, payload: Any) -> Dict[str, Any]:
        """Select the object to merge from a read response"""
        if not isinstance(payload, dict):
            raise RemoteStateError(
                f"Unexpected {self.name} settings response", status_code=200, body=str(payload)
            )
        return payload

    def merge_response(self, config, payload: Dict[str, Any], populate: bool = False):
        """Return a copy of config with the remote payload merged in"""
        return merge_wire(config, payload, populate=populate)

    # Framework boundary

    def read(self, ctx: ReconcileContext, state) -> Diagnostics:
        """
        Refresh this sub-domain of state from the remote.

        404/406 mean the feature is not configured for the project and are
        not errors; on import the sub-document is then dropped. The state
        is only touched once the whole response merged cleanly.
        """
        diagnostics = Diagnostics()
        project_ref = project_ref_of(state, tracked=True)

        try:
            response = ctx.client.request(
                "GET",
                project_endpoint(project_ref, self.read_path),
                allowed_statuses=NOT_CONFIGURED_STATUS_CODES,
            )
            if response.status_code in NOT_CONFIGURED_STATUS_CODES:
                self.logger.info(
                    f"{self.name} settings not configured for {project_ref} "
                    f"(status {response.status_code})"
                )
                if ctx.populate:
                    setattr(state, self.attribute, None)
                return diagnostics

            payload = self.extract_payload(decode_json(response))
            current = getattr(state, self.attribute) or self.config_class()
            merged = self.merge_response(copy.deepcopy(current), payload, populate=ctx.populate)
        except PlatsyncError as e:
            self.logger.error(f"Unable to read {self.name} settings for {project_ref}: {e}")
            diagnostics.add_error(f"Unable to read {self.name} settings", str(e), self.name)
            return diagnostics
        except (TypeError, ValueError, KeyError) as e:
            self.logger.error(f"Unexpected {self.name} settings response for {project_ref}: {e}")
            diagnostics.add_error(
                f"Unable to read {self.name} settings", f"unexpected response: {e}", self.name
            )
            return diagnostics

        setattr(state, self.attribute, merged)
        self.logger.debug(f"Read {self.name} settings for {project_ref}")
        return diagnostics

    def update(self, ctx: ReconcileContext, plan) -> Diagnostics:
        """Send the declared settings of this sub-domain to the remote"""
        diagnostics = Diagnostics()
        config = getattr(plan, self.attribute)
        if config is None:
            return diagnostics

        project_ref = project_ref_of(plan)
        try:
            body = self.build_request(config)
        except ValidationError as e:
            self.logger.warning(f"Rejected {self.name} settings for {project_ref}: {e}")
            diagnostics.add_error("Validation Error", str(e), self.name)
            return diagnostics

        try:
            ctx.client.request(
                self.write_method,
                project_endpoint(project_ref, self.write_path),
                json_body=body,
            )
        except PlatsyncError as e:
            self.logger.error(f"Unable to update {self.name} settings for {project_ref}: {e}")
            diagnostics.add_error(f"Unable to update {self.name} settings", str(e), self.name)
            return diagnostics

        self.logger.info(f"Updated {self.name} settings for {project_ref} ({len(body)} fields)")
        return diagnostics
