"""
Network restriction validation.
"""

import ipaddress
from typing import Iterable, List, Optional, Tuple

from platsync.exceptions import ValidationError

# RFC 1918 and RFC 4193 ranges; public and unspecified ranges are allowed
PRIVATE_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("fc00::/7"),
)


def _parse_address(cidr: str):
    if not isinstance(cidr, str) or "/" not in cidr:
        raise ValidationError(f"invalid CIDR: {cidr}")
    try:
        address = ipaddress.ip_interface(cidr.strip()).ip
    except ValueError:
        raise ValidationError(f"invalid CIDR: {cidr}")
    # IPv4-mapped IPv6 addresses count as IPv4
    if address.version == 6 and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def address_family(cidr: str) -> Optional[int]:
    """IP family (4 or 6) of an entry, or None when it does not parse"""
    try:
        return _parse_address(cidr).version
    except ValidationError:
        return None


def is_private(address) -> bool:
    return any(address.version == net.version and address in net for net in PRIVATE_NETWORKS)


def validate_cidr(cidr: str) -> int:
    """
    Validate one allow-list entry and return its IP family (4 or 6).

    Raises:
        ValidationError: unparsable entry or private address
    """
    address = _parse_address(cidr)
    if is_private(address):
        raise ValidationError(f"private IP not allowed: {cidr}")
    return address.version


def partition_cidrs(cidrs: Iterable[str]) -> Tuple[List[str], List[str]]:
    """
    Split allow-list entries into (IPv4, IPv6) lists, preserving order.

    Entries are validated in order and the first failure aborts.
    """
    v4: List[str] = []
    v6: List[str] = []
    for cidr in cidrs:
        if validate_cidr(cidr) == 4:
            v4.append(cidr)
        else:
            v6.append(cidr)
    return v4, v6
