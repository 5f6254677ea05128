"""
hostgate.auth.tokens

Opaque token validation.

Responsibilities:
- Define the `TokenValidator` capability (validate + resolve principal).
- Provide the configuration-backed, in-memory implementation.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from hostgate.auth.models import Principal
from hostgate.net.addresses import parse_addresses
from hostgate.observability.logging import get_logger
from hostgate.settings import TokenSettings

log = get_logger(__name__)


@runtime_checkable
class TokenValidator(Protocol):
    def validate(self, token: str) -> bool: ...

    def resolve_principal(self, token: str) -> Principal | None: ...


class InMemoryTokenStore:
    """
    Token table loaded once at startup; immutable afterwards.

    A persistent store can replace this by implementing `TokenValidator`.
    """

    def __init__(self, principals: Mapping[str, Principal]) -> None:
        self._principals: Mapping[str, Principal] = MappingProxyType(dict(principals))

    @classmethod
    def from_settings(cls, tokens: Mapping[str, TokenSettings]) -> InMemoryTokenStore:
        principals: dict[str, Principal] = {}
        for index, (token, cfg) in enumerate(tokens.items()):
            # Token values are secrets; log the entry position, never the token.
            if not token.strip() or not cfg.user_id.strip():
                log.warning("token_entry_rejected", entry=index, reason="missing token or user_id")
                continue
            bound = bool(cfg.allowed_addresses)
            allowed = parse_addresses(
                cfg.allowed_addresses, source=f"tokens[{cfg.user_id}].allowed_addresses"
            )
            if bound and not allowed:
                # Fail closed: a binding list with no usable entry admits no origin.
                log.warning(
                    "token_entry_rejected",
                    entry=index,
                    subject=cfg.user_id,
                    reason="no valid allowed_addresses; token usable from no origin",
                )
            principals[token] = Principal(
                subject=cfg.user_id,
                roles=frozenset(cfg.roles),
                allowed_addresses=allowed,
                origin_bound=bound,
            )
        log.info("token_store_loaded", count=len(principals))
        return cls(principals)

    def __len__(self) -> int:
        return len(self._principals)

    def validate(self, token: str) -> bool:
        return token in self._principals

    def resolve_principal(self, token: str) -> Principal | None:
        return self._principals.get(token)


# --- Module Notes -----------------------------------------------------------
# Lookups are plain dict reads on a read-only mapping, safe to share across requests.
