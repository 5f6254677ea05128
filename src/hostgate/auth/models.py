"""
hostgate.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`).
- Define what the identity layer hands to the decision engine (`CredentialResult`).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hostgate.net.addresses import Address


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity resolved from an opaque token.
    """

    subject: str
    roles: frozenset[str]
    # Origins this token may be used from; only consulted when origin_bound.
    allowed_addresses: frozenset[Address] = field(default_factory=frozenset)
    # True when the token was configured with an address list, even if no entry parsed.
    origin_bound: bool = False

    def has_role(self, role: str) -> bool:
        # Flat, case-sensitive membership; roles are not hierarchical.
        return role in self.roles


@dataclass(frozen=True, slots=True)
class CredentialResult:
    # True whenever a bearer credential was sent, valid or not.
    presented: bool
    principal: Principal | None = None


ANONYMOUS = CredentialResult(presented=False)


# --- Module Notes -----------------------------------------------------------
# `presented` vs. a resolved `principal` is what separates a 401 challenge from a 403.
