"""
hostgate.net.origin

Same-host address discovery.

Responsibilities:
- Enumerate unicast addresses bound to network interfaces that are up (via psutil).
- Merge them with the loopback literals and operator-configured extras (hairpin NAT, EIP).
- Compute the set exactly once per process and serve lock-free reads afterwards.
- Degrade to loopback-only when enumeration fails.
"""

from __future__ import annotations

import socket
import threading
from collections.abc import Callable, Iterable, Sequence

import psutil

from hostgate.net.addresses import LOOPBACKS, Address, normalize, parse_address
from hostgate.observability.logging import get_logger

log = get_logger(__name__)

# (interface name, address literal) pairs.
InterfaceEnumerator = Callable[[], Iterable[tuple[str, str]]]

_INET_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def enumerate_interface_addresses() -> list[tuple[str, str]]:
    stats = psutil.net_if_stats()
    found: list[tuple[str, str]] = []
    for name, addrs in psutil.net_if_addrs().items():
        st = stats.get(name)
        if st is None or not st.isup:
            continue
        for snic in addrs:
            if snic.family in _INET_FAMILIES:
                found.append((name, snic.address))
    return found


class OriginRegistry:
    """
    Lazily computed, immutable set of addresses considered "this host".

    The first caller of `addresses()` runs the enumeration under a lock; concurrent
    callers block on the same lock and then observe the finished frozenset.
    """

    def __init__(
        self,
        additional_addresses: Sequence[str] = (),
        *,
        enumerate_interfaces: InterfaceEnumerator = enumerate_interface_addresses,
    ) -> None:
        self._additional = tuple(additional_addresses)
        self._enumerate = enumerate_interfaces
        self._lock = threading.Lock()
        self._addresses: frozenset[Address] | None = None
        self._passes = 0

    @property
    def is_resolved(self) -> bool:
        return self._addresses is not None

    @property
    def enumeration_passes(self) -> int:
        return self._passes

    def addresses(self) -> frozenset[Address]:
        current = self._addresses
        if current is not None:
            return current
        with self._lock:
            if self._addresses is None:
                self._addresses = self._compute()
            return self._addresses

    def _compute(self) -> frozenset[Address]:
        self._passes += 1
        try:
            found: set[Address] = set()
            for name, literal in self._enumerate():
                addr = parse_address(literal)
                if addr is not None:
                    found.add(addr)
                    log.info("origin_address_added", address=str(addr), interface=name)
        except Exception:
            log.warning(
                "origin_enumeration_failed",
                fallback=sorted(str(a) for a in LOOPBACKS),
                exc_info=True,
            )
            return LOOPBACKS

        found.update(LOOPBACKS)
        for literal in self._additional:
            addr = parse_address(literal)
            if addr is None:
                log.warning(
                    "malformed_address_literal",
                    source="additional_same_host_addresses",
                    literal=literal,
                )
                continue
            found.add(addr)
            log.info("origin_address_added", address=str(addr), interface="configured")

        return frozenset(found)

    def contains(self, address: Address | str | None) -> bool:
        addr = normalize(address)
        return addr is not None and addr in self.addresses()


_registry: OriginRegistry | None = None
_registry_lock = threading.Lock()


def get_origin_registry(additional_addresses: Sequence[str] = ()) -> OriginRegistry:
    """
    Process-wide registry. The first call fixes the configured extras; later
    arguments are ignored.
    """
    global _registry
    if _registry is not None:
        return _registry
    with _registry_lock:
        if _registry is None:
            _registry = OriginRegistry(additional_addresses)
        return _registry


def reset_origin_registry() -> None:
    # Tests only: forget the process-wide instance.
    global _registry
    with _registry_lock:
        _registry = None


# --- Module Notes -----------------------------------------------------------
# Addresses are never recomputed after the first pass; interface changes (DHCP renewals,
# new NICs) need a process restart to be picked up.
