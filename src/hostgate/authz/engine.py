"""
hostgate.authz.engine

Composite authorization engine.

Responsibilities:
- Model requirements as a tagged union: Ip(policy), Identity(roles...), TokenOrigin.
- Combine requirements with AND (`require_all`) or OR (`require_any`).
- Classify denials as `unauthenticated` (challenge) or `forbidden` (plain rejection).
- Never raise: every internal failure resolves to a logged deny.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from hostgate.auth.models import ANONYMOUS, CredentialResult, Principal
from hostgate.authz.evaluators import (
    IdentityDecisionEvaluator,
    IpDecisionEvaluator,
    SameHostSource,
    TokenOriginEvaluator,
)
from hostgate.authz.policies import PolicyRegistry
from hostgate.net.addresses import Address, normalize
from hostgate.observability.logging import get_logger

log = get_logger(__name__)


class RequirementKind(enum.StrEnum):
    ip = "IP"
    identity = "IDENTITY"
    token_origin = "TOKEN_ORIGIN"


class Combinator(enum.StrEnum):
    require_all = "ALL"
    require_any = "ANY"


class FailureKind(enum.StrEnum):
    none = "NONE"
    # No credential presented; the caller should be challenged.
    unauthenticated = "UNAUTHENTICATED"
    # Credential presented (or none applicable) but the request is not permitted.
    forbidden = "FORBIDDEN"


@dataclass(frozen=True, slots=True)
class Requirement:
    kind: RequirementKind
    policy_name: str | None = None
    roles: tuple[str, ...] = ()

    @classmethod
    def ip(cls, policy_name: str) -> Requirement:
        return cls(kind=RequirementKind.ip, policy_name=policy_name)

    @classmethod
    def identity(cls, *roles: str) -> Requirement:
        # Several roles = any one of them satisfies the requirement.
        return cls(kind=RequirementKind.identity, roles=tuple(roles))

    @classmethod
    def token_origin(cls) -> Requirement:
        return cls(kind=RequirementKind.token_origin)

    @property
    def needs_identity(self) -> bool:
        return self.kind in (RequirementKind.identity, RequirementKind.token_origin)

    def describe(self) -> str:
        if self.kind is RequirementKind.ip:
            return f"ip:{self.policy_name}"
        if self.kind is RequirementKind.identity:
            return "identity:" + ("|".join(self.roles) or "*")
        return "token_origin"


@dataclass(frozen=True, slots=True)
class AccessRule:
    """
    Named endpoint rule. An empty requirement list is an anonymous endpoint.
    """

    name: str
    requirements: tuple[Requirement, ...] = ()
    combinator: Combinator = Combinator.require_all

    @classmethod
    def all_of(cls, name: str, *requirements: Requirement) -> AccessRule:
        return cls(name=name, requirements=requirements, combinator=Combinator.require_all)

    @classmethod
    def any_of(cls, name: str, *requirements: Requirement) -> AccessRule:
        return cls(name=name, requirements=requirements, combinator=Combinator.require_any)


@dataclass(frozen=True, slots=True)
class AuthorizationRequest:
    origin: Address | str | None
    credentials: CredentialResult = ANONYMOUS

    @property
    def principal(self) -> Principal | None:
        return self.credentials.principal


@dataclass(frozen=True, slots=True)
class AuthorizationDecision:
    allowed: bool
    failure_kind: FailureKind = FailureKind.none

    @classmethod
    def deny(cls, failure_kind: FailureKind) -> AuthorizationDecision:
        return cls(allowed=False, failure_kind=failure_kind)


ALLOW = AuthorizationDecision(allowed=True)


class CompositeAuthorizer:
    """
    Stateless across calls; holds only read-only registries and evaluators.
    """

    def __init__(
        self,
        ip: IpDecisionEvaluator,
        identity: IdentityDecisionEvaluator | None = None,
        token_origin: TokenOriginEvaluator | None = None,
    ) -> None:
        self._ip = ip
        self._identity = identity or IdentityDecisionEvaluator()
        self._token_origin = token_origin or TokenOriginEvaluator()

    @classmethod
    def from_registries(cls, policies: PolicyRegistry, origins: SameHostSource) -> CompositeAuthorizer:
        return cls(ip=IpDecisionEvaluator(policies, origins))

    def authorize(self, request: AuthorizationRequest, rule: AccessRule) -> AuthorizationDecision:
        return self.evaluate(request, rule.requirements, rule.combinator, rule_name=rule.name)

    def evaluate(
        self,
        request: AuthorizationRequest,
        requirements: Sequence[Requirement],
        combinator: Combinator = Combinator.require_all,
        *,
        rule_name: str = "inline",
    ) -> AuthorizationDecision:
        if not requirements:
            return ALLOW

        if combinator is Combinator.require_any:
            allowed = any(self._check(request, r) for r in requirements)
        else:
            allowed = all(self._check(request, r) for r in requirements)

        decision = ALLOW if allowed else AuthorizationDecision.deny(self._classify(request, requirements))
        remote = normalize(request.origin)
        log.info(
            "authorization_decision",
            rule=rule_name,
            combinator=str(combinator),
            requirements=[r.describe() for r in requirements],
            origin=str(remote) if remote is not None else None,
            credential_presented=request.credentials.presented,
            subject=request.principal.subject if request.principal else None,
            allowed=decision.allowed,
            failure_kind=str(decision.failure_kind),
        )
        return decision

    def _check(self, request: AuthorizationRequest, requirement: Requirement) -> bool:
        try:
            if requirement.kind is RequirementKind.ip:
                return self._ip.evaluate(requirement.policy_name or "", request.origin)
            if requirement.kind is RequirementKind.identity:
                return self._identity.evaluate(request.principal, requirement.roles)
            if requirement.kind is RequirementKind.token_origin:
                return self._token_origin.evaluate(request.principal, request.origin)
        except Exception:
            # A faulty evaluator must not abort request handling; it denies instead.
            log.error(
                "requirement_evaluation_failed",
                requirement=requirement.describe(),
                exc_info=True,
            )
            return False
        log.error("requirement_evaluation_failed", requirement=requirement.describe(), reason="unknown_kind")
        return False

    @staticmethod
    def _classify(request: AuthorizationRequest, requirements: Sequence[Requirement]) -> FailureKind:
        # Only a request that never offered a credential can be usefully challenged.
        if any(r.needs_identity for r in requirements) and not request.credentials.presented:
            return FailureKind.unauthenticated
        return FailureKind.forbidden


# --- Module Notes -----------------------------------------------------------
# "OR" appears at two levels and they are different operations: an IpPolicy's allowed set
# is a union of address sets (same-host ∪ explicit), while `require_any` is a logical OR
# between independent requirements (for example ip:AdminOffice OR identity:Admin).
