"""
Database network restrictions.

The read response wraps the allow-lists in a "config" object. Entries are
routed by parsed address family regardless of which declared list holds
them, and a read puts them back in the list that declared them.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List

from platsync.exceptions import RemoteStateError
from .base import SubdomainReconciler
from .fields import STRING_LIST, is_present, merge_list, setting, value_of
from .validation import address_family, partition_cidrs

# Wire list and declared list each address family naturally belongs to
V4_WIRE = "dbAllowedCidrs"
V6_WIRE = "dbAllowedCidrsV6"
NATURAL_LISTS = {4: "db_allowed_cidrs", 6: "db_allowed_cidrs_v6"}


@dataclass
class NetworkConfig:
    db_allowed_cidrs: object = setting(
        STRING_LIST, "List of allowed IPv4 CIDR blocks for database access", wire=V4_WIRE
    )
    db_allowed_cidrs_v6: object = setting(
        STRING_LIST, "List of allowed IPv6 CIDR blocks for database access", wire=V6_WIRE
    )


def _declared_lists(config: NetworkConfig) -> Dict[str, List[str]]:
    return {name: value_of(getattr(config, name), []) for name in NATURAL_LISTS.values()}


def _holds_rerouted_entries(declared: Dict[str, List[str]]) -> bool:
    """Whether a declared list holds entries of the other family"""
    for family, name in NATURAL_LISTS.items():
        other = 6 if family == 4 else 4
        if any(address_family(cidr) == other for cidr in declared[name]):
            return True
    return False


class NetworkReconciler(SubdomainReconciler):
    name = "network"
    attribute = "network"
    config_class = NetworkConfig
    read_path = "network-restrictions"
    write_path = "network-restrictions/apply"
    write_method = "POST"

    def build_request(self, config: NetworkConfig) -> Dict[str, Any]:
        declared = value_of(config.db_allowed_cidrs, []) + value_of(config.db_allowed_cidrs_v6, [])
        v4, v6 = partition_cidrs(declared)

        # A wire list is sent when declared or when it received routed entries
        body: Dict[str, Any] = {}
        if is_present(config.db_allowed_cidrs) or v4:
            body[V4_WIRE] = v4
        if is_present(config.db_allowed_cidrs_v6) or v6:
            body[V6_WIRE] = v6
        return body

    def extract_payload(self, payload: Any) -> Dict[str, Any]:
        payload = super().extract_payload(payload)
        config = payload.get("config") or {}
        if not isinstance(config, dict):
            raise RemoteStateError(
                "Unexpected network settings response", status_code=200, body=str(payload)
            )
        return config

    def merge_response(self, config: NetworkConfig, payload: Dict[str, Any], populate: bool = False):
        """
        Merge the remote allow-lists back into the declared lists.

        When a declared list held entries of the other family, each remote
        entry returns to the list that declared it. Undeclared remote
        entries go to the list already holding their family, otherwise to
        their natural list.
        """
        declared = _declared_lists(config)
        if not _holds_rerouted_entries(declared):
            return super().merge_response(config, payload, populate)

        homes = {}
        for family, natural in NATURAL_LISTS.items():
            holders = [
                name
                for name, entries in declared.items()
                if any(address_family(cidr) == family for cidr in entries)
            ]
            homes[family] = natural if natural in holders or not holders else holders[0]

        owners = {cidr: name for name, entries in declared.items() for cidr in entries}
        assigned: Dict[str, List[str]] = {name: [] for name in declared}
        for wire, family in ((V4_WIRE, 4), (V6_WIRE, 6)):
            for cidr in payload.get(wire) or []:
                assigned[owners.get(cidr, homes[family])].append(cidr)

        return replace(
            config,
            **{
                name: merge_list(getattr(config, name), assigned[name], populate)
                for name in declared
            },
        )
