"""
tests.test_addresses

Address normalization and per-entry parsing.
"""

from __future__ import annotations

from ipaddress import IPv4Address, IPv6Address

import pytest

from hostgate.net.addresses import IPV4_LOOPBACK, IPV6_LOOPBACK, normalize, parse_address, parse_addresses


def test_ipv4_mapped_ipv6_becomes_ipv4() -> None:
    assert normalize("::ffff:127.0.0.1") == IPV4_LOOPBACK
    assert normalize(IPv6Address("::ffff:203.0.113.10")) == IPv4Address("203.0.113.10")


def test_other_forms_pass_through() -> None:
    assert normalize(IPv4Address("10.1.2.3")) == IPv4Address("10.1.2.3")
    assert normalize("::1") == IPV6_LOOPBACK
    assert normalize("2001:db8::1") == IPv6Address("2001:db8::1")


@pytest.mark.parametrize(
    "raw",
    ["127.0.0.1", "::ffff:10.0.0.1", "::1", "fe80::1%eth0", "2001:db8::ffff:1", " 8.8.8.8 "],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize(raw)
    assert once is not None
    assert normalize(once) == once


def test_absent_or_garbage_yields_none() -> None:
    assert normalize(None) is None
    assert parse_address("") is None
    assert parse_address("   ") is None
    assert parse_address("not-an-ip") is None
    assert parse_address("10.0.0.0/8") is None


def test_zone_id_is_dropped() -> None:
    assert parse_address("fe80::1%eth0") == IPv6Address("fe80::1")


def test_parse_addresses_skips_malformed_entries() -> None:
    parsed = parse_addresses(["203.0.113.10", "bogus", "::ffff:203.0.113.10", "::1"], source="test")
    assert parsed == frozenset({IPv4Address("203.0.113.10"), IPV6_LOOPBACK})


# --- Module Notes -----------------------------------------------------------
# CIDR ranges are deliberately not accepted: policies list exact addresses.
