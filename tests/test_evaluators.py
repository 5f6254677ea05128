"""
tests.test_evaluators

IP policy registry and the single-signal evaluators.
"""

from __future__ import annotations

from ipaddress import IPv4Address

import pytest

from hostgate.auth.models import Principal
from hostgate.authz.evaluators import IdentityDecisionEvaluator, IpDecisionEvaluator, TokenOriginEvaluator
from hostgate.authz.policies import PolicyRegistry
from hostgate.net.origin import OriginRegistry
from hostgate.settings import IpPolicySettings


@pytest.fixture
def policies() -> PolicyRegistry:
    return PolicyRegistry.from_settings(
        {
            "SameHost": IpPolicySettings(include_same_host=True),
            "Partner1": IpPolicySettings(allowed_addresses=["203.0.113.10", "203.0.113.999"]),
            "Mixed": IpPolicySettings(include_same_host=True, allowed_addresses=["198.51.100.7"]),
            "Locked": IpPolicySettings(),
        }
    )


@pytest.fixture
def ip_eval(policies: PolicyRegistry, origin_registry: OriginRegistry) -> IpDecisionEvaluator:
    return IpDecisionEvaluator(policies, origin_registry)


def test_registry_parses_entries_independently(policies: PolicyRegistry) -> None:
    partner = policies.get_policy("Partner1")
    assert partner is not None
    assert partner.explicit_addresses == frozenset({IPv4Address("203.0.113.10")})
    assert policies.get_policy("Nope") is None
    assert policies.names() == ["Locked", "Mixed", "Partner1", "SameHost"]


def test_deny_all_policy_is_valid_and_denies_loopback(
    policies: PolicyRegistry, ip_eval: IpDecisionEvaluator
) -> None:
    locked = policies.get_policy("Locked")
    assert locked is not None and locked.denies_all
    for addr in ("127.0.0.1", "::1", "10.0.0.5", "203.0.113.10"):
        assert not ip_eval.evaluate("Locked", addr)


@pytest.mark.parametrize("policy", ["SameHost", "Mixed"])
@pytest.mark.parametrize("addr", ["127.0.0.1", "::1", "::ffff:127.0.0.1"])
def test_loopback_is_same_host(ip_eval: IpDecisionEvaluator, policy: str, addr: str) -> None:
    assert ip_eval.evaluate(policy, addr)


def test_same_host_includes_interfaces_and_configured_extras(ip_eval: IpDecisionEvaluator) -> None:
    assert ip_eval.evaluate("SameHost", "10.0.0.5")
    assert ip_eval.evaluate("SameHost", "192.0.2.44")
    assert not ip_eval.evaluate("SameHost", "203.0.113.10")


def test_explicit_list_is_unioned_with_same_host(ip_eval: IpDecisionEvaluator) -> None:
    assert ip_eval.evaluate("Mixed", "198.51.100.7")
    assert ip_eval.evaluate("Mixed", "10.0.0.5")
    assert not ip_eval.evaluate("Mixed", "198.51.100.8")


def test_whitelist_only_policy(ip_eval: IpDecisionEvaluator) -> None:
    assert ip_eval.evaluate("Partner1", "203.0.113.10")
    assert ip_eval.evaluate("Partner1", "::ffff:203.0.113.10")
    assert not ip_eval.evaluate("Partner1", "203.0.113.11")
    assert not ip_eval.evaluate("Partner1", "127.0.0.1")


def test_unknown_policy_and_missing_origin_deny(ip_eval: IpDecisionEvaluator) -> None:
    assert not ip_eval.evaluate("Nope", "127.0.0.1")
    assert not ip_eval.evaluate("SameHost", None)
    assert not ip_eval.evaluate("SameHost", "unix-socket")


def test_identity_rules() -> None:
    evaluator = IdentityDecisionEvaluator()
    partner = Principal(subject="p1", roles=frozenset({"Partner1"}))

    assert not evaluator.evaluate(None)
    assert not evaluator.evaluate(None, ["Partner1"])
    assert evaluator.evaluate(partner)
    assert evaluator.evaluate(partner, ["Partner1"])
    assert evaluator.evaluate(partner, ["Admin", "Partner1"])
    assert not evaluator.evaluate(partner, ["Admin"])
    assert not evaluator.evaluate(partner, ["PARTNER1"])


def test_token_origin_binding() -> None:
    evaluator = TokenOriginEvaluator()
    unbound = Principal(subject="u", roles=frozenset())
    bound = Principal(
        subject="w",
        roles=frozenset(),
        allowed_addresses=frozenset({IPv4Address("203.0.113.10")}),
        origin_bound=True,
    )
    # Binding list configured, but nothing in it parsed.
    bound_to_nothing = Principal(subject="x", roles=frozenset(), origin_bound=True)

    assert not evaluator.evaluate(None, "203.0.113.10")
    assert evaluator.evaluate(unbound, "198.51.100.1")
    assert evaluator.evaluate(bound, "::ffff:203.0.113.10")
    assert not evaluator.evaluate(bound, "203.0.113.11")
    assert not evaluator.evaluate(bound, None)
    assert not evaluator.evaluate(bound_to_nothing, "203.0.113.10")
    assert not evaluator.evaluate(bound_to_nothing, "127.0.0.1")
