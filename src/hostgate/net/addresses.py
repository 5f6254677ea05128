"""
hostgate.net.addresses

Address parsing and normalization.

Responsibilities:
- Map IPv4-mapped IPv6 literals (``::ffff:a.b.c.d``) to plain IPv4 so equality is stable.
- Parse configured address literals one entry at a time, skipping malformed ones.
"""

from __future__ import annotations

from collections.abc import Iterable
from ipaddress import IPv4Address, IPv6Address, ip_address

from hostgate.observability.logging import get_logger

log = get_logger(__name__)

Address = IPv4Address | IPv6Address

IPV4_LOOPBACK: Address = IPv4Address("127.0.0.1")
IPV6_LOOPBACK: Address = IPv6Address("::1")
LOOPBACKS: frozenset[Address] = frozenset({IPV4_LOOPBACK, IPV6_LOOPBACK})


def normalize(address: Address | str | None) -> Address | None:
    """
    Return the canonical form of ``address``, or None when it cannot be evaluated.

    Idempotent: ``normalize(normalize(a)) == normalize(a)``.
    """
    if address is None:
        return None
    if isinstance(address, str):
        return parse_address(address)
    if isinstance(address, IPv6Address):
        mapped = address.ipv4_mapped
        if mapped is not None:
            return mapped
        if address.scope_id is not None:
            # Zone ids are interface-local; compare on the bare address.
            return IPv6Address(address.compressed.split("%", 1)[0])
    return address


def parse_address(text: str | None) -> Address | None:
    if text is None:
        return None
    raw = text.strip()
    if not raw:
        return None
    try:
        parsed = ip_address(raw.split("%", 1)[0])
    except ValueError:
        return None
    return normalize(parsed)


def parse_addresses(entries: Iterable[str], *, source: str) -> frozenset[Address]:
    out: set[Address] = set()
    for entry in entries:
        addr = parse_address(entry)
        if addr is None:
            log.warning("malformed_address_literal", source=source, literal=entry)
            continue
        out.add(addr)
    return frozenset(out)


# --- Module Notes -----------------------------------------------------------
# Every address that is stored or compared anywhere in the engine goes through
# `normalize`, so `::ffff:127.0.0.1` and `127.0.0.1` are one member of any set.
