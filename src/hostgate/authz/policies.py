"""
hostgate.authz.policies

IP policy registry.

Responsibilities:
- Hold named `IpPolicy` entries built once from settings.
- Parse each configured address independently; malformed literals are skipped.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from hostgate.net.addresses import Address, parse_addresses
from hostgate.observability.logging import get_logger
from hostgate.settings import IpPolicySettings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class IpPolicy:
    name: str
    include_same_host: bool = False
    explicit_addresses: frozenset[Address] = field(default_factory=frozenset)

    @property
    def denies_all(self) -> bool:
        return not self.include_same_host and not self.explicit_addresses


class PolicyRegistry:
    def __init__(self, policies: Mapping[str, IpPolicy]) -> None:
        self._policies: Mapping[str, IpPolicy] = MappingProxyType(dict(policies))

    @classmethod
    def from_settings(cls, policies: Mapping[str, IpPolicySettings]) -> PolicyRegistry:
        built: dict[str, IpPolicy] = {}
        for name, cfg in policies.items():
            policy = IpPolicy(
                name=name,
                include_same_host=cfg.include_same_host,
                explicit_addresses=parse_addresses(
                    cfg.allowed_addresses, source=f"ip_policies[{name}].allowed_addresses"
                ),
            )
            built[name] = policy
            log.info(
                "ip_policy_loaded",
                policy=name,
                include_same_host=policy.include_same_host,
                addresses=sorted(str(a) for a in policy.explicit_addresses),
                denies_all=policy.denies_all,
            )
        return cls(built)

    def get_policy(self, name: str) -> IpPolicy | None:
        return self._policies.get(name)

    def names(self) -> list[str]:
        return sorted(self._policies)


# --- Module Notes -----------------------------------------------------------
# Unknown policy names are not a load-time error: endpoints and policies are configured
# independently, and a missing policy simply denies at evaluation time.
