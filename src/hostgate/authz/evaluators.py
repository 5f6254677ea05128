"""
hostgate.authz.evaluators

Single-signal evaluators.

Responsibilities:
- `IpDecisionEvaluator`: origin address vs. a named IP policy (same-host and/or explicit list).
- `IdentityDecisionEvaluator`: authenticated principal, optionally holding one of a set of roles.
- `TokenOriginEvaluator`: origin address vs. the addresses bound to the principal's token.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from hostgate.auth.models import Principal
from hostgate.authz.policies import PolicyRegistry
from hostgate.net.addresses import Address, normalize
from hostgate.observability.logging import get_logger

log = get_logger(__name__)


class SameHostSource(Protocol):
    def addresses(self) -> frozenset[Address]: ...


class IpDecisionEvaluator:
    """
    One IP mechanism for both "same host" and "whitelisted" origins: a policy's
    allowed set is the union of the same-host set (when included) and its explicit list.
    """

    def __init__(self, policies: PolicyRegistry, origins: SameHostSource) -> None:
        self._policies = policies
        self._origins = origins

    def evaluate(self, policy_name: str, origin: Address | str | None) -> bool:
        remote = normalize(origin)
        if remote is None:
            log.warning("missing_origin_address", policy=policy_name, raw=_raw(origin))
            return False

        policy = self._policies.get_policy(policy_name)
        if policy is None:
            log.warning(
                "unknown_policy",
                policy=policy_name,
                available=self._policies.names(),
            )
            return False

        allowed: frozenset[Address] = policy.explicit_addresses
        if policy.include_same_host:
            allowed = allowed | self._origins.addresses()

        granted = remote in allowed
        log.info(
            "ip_decision",
            policy=policy_name,
            origin=str(remote),
            include_same_host=policy.include_same_host,
            allowed_count=len(allowed),
            granted=granted,
        )
        return granted


class IdentityDecisionEvaluator:
    def evaluate(self, principal: Principal | None, required_roles: Sequence[str] = ()) -> bool:
        if principal is None:
            log.info("identity_decision", granted=False, reason="no_principal")
            return False
        if not required_roles:
            log.debug("identity_decision", subject=principal.subject, granted=True)
            return True
        for role in required_roles:
            if principal.has_role(role):
                log.debug("identity_decision", subject=principal.subject, role=role, granted=True)
                return True
        log.info(
            "identity_decision",
            subject=principal.subject,
            required_roles=list(required_roles),
            granted=False,
            reason="missing_role",
        )
        return False


class TokenOriginEvaluator:
    def evaluate(self, principal: Principal | None, origin: Address | str | None) -> bool:
        if principal is None:
            return False
        if not principal.origin_bound:
            # Token carries no origin restriction. A bound token with an empty set denies.
            return True
        remote = normalize(origin)
        granted = remote is not None and remote in principal.allowed_addresses
        log.info(
            "token_origin_decision",
            subject=principal.subject,
            origin=str(remote) if remote is not None else None,
            granted=granted,
        )
        return granted


def _raw(origin: object) -> str | None:
    return None if origin is None else str(origin)


# --- Module Notes -----------------------------------------------------------
# Evaluators return plain booleans; classification (401 vs 403) is decided one level up
# in `hostgate.authz.engine`, which knows whether a credential was presented at all.
