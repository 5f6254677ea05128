"""
tests.conftest

Shared fixtures.

Responsibilities:
- Provide a deterministic same-host registry (no real interface enumeration).
- Provide settings mirroring a typical deployment: Partner1/AdminOffice policies and tokens.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from hostgate.net.origin import OriginRegistry
from hostgate.settings import IpPolicySettings, Settings, TokenSettings

PARTNER_IP = "203.0.113.10"
OFFICE_IP = "198.51.100.7"
LAN_IP = "10.0.0.5"


def fake_interfaces(*pairs: tuple[str, str]) -> Callable[[], Iterable[tuple[str, str]]]:
    def _enumerate() -> Iterable[tuple[str, str]]:
        return list(pairs)

    return _enumerate


@pytest.fixture
def origin_registry() -> OriginRegistry:
    return OriginRegistry(
        ["192.0.2.44"],
        enumerate_interfaces=fake_interfaces(("lo", "127.0.0.1"), ("eth0", LAN_IP)),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        ip_policies={
            "Partner1": IpPolicySettings(allowed_addresses=[PARTNER_IP]),
            "AdminOffice": IpPolicySettings(allowed_addresses=[OFFICE_IP]),
            "Locked": IpPolicySettings(),
        },
        tokens={
            "abc": TokenSettings(user_id="p1", roles=["Partner1", "DataReader"]),
            "writer": TokenSettings(
                user_id="w1", roles=["DataWriter"], allowed_addresses=[PARTNER_IP]
            ),
            "admin": TokenSettings(user_id="root", roles=["Admin"]),
            "plain": TokenSettings(user_id="u1"),
        },
    )


# --- Module Notes -----------------------------------------------------------
# 127.0.0.1 is httpx ASGITransport's default client address; tests that need another
# origin build their own transport with `client=(ip, port)`.
