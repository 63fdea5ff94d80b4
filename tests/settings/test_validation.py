import pytest

from platsync.exceptions import ValidationError
from platsync.settings.validation import partition_cidrs, validate_cidr


@pytest.mark.parametrize(
    "cidr",
    ["10.0.0.0/8", "10.1.2.3/32", "172.16.0.0/12", "172.31.255.1/32", "192.168.1.0/24", "fd00::/8"],
)
def test_private_ranges_are_rejected(cidr):
    with pytest.raises(ValidationError, match=f"private IP not allowed: {cidr}"):
        validate_cidr(cidr)


@pytest.mark.parametrize("cidr", ["1.2.3.4", "not-a-cidr/24", "300.1.1.1/32", "1.2.3.4/33", ""])
def test_invalid_entries_are_rejected(cidr):
    with pytest.raises(ValidationError, match="invalid CIDR"):
        validate_cidr(cidr)


def test_public_and_unspecified_ranges_are_allowed():
    assert validate_cidr("0.0.0.0/0") == 4
    assert validate_cidr("172.32.0.0/16") == 4
    assert validate_cidr("::/0") == 6
    assert validate_cidr("2001:db8::/32") == 6


def test_ipv4_mapped_address_counts_as_ipv4():
    with pytest.raises(ValidationError, match="private IP"):
        validate_cidr("::ffff:10.0.0.1/128")


def test_partition_routes_by_family_preserving_order():
    v4, v6 = partition_cidrs(["1.2.3.4/32", "2001:db8::/32", "5.6.7.0/24"])
    assert v4 == ["1.2.3.4/32", "5.6.7.0/24"]
    assert v6 == ["2001:db8::/32"]


def test_partition_first_failure_aborts():
    with pytest.raises(ValidationError, match="invalid CIDR: bogus"):
        partition_cidrs(["1.2.3.4/32", "bogus", "10.0.0.0/8"])


def test_partition_empty():
    assert partition_cidrs([]) == ([], [])
