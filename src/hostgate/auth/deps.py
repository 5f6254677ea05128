"""
hostgate.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Convert an opaque bearer token into a `CredentialResult`.
- Never reject on its own: unknown or missing tokens are reported, and the
  authorization layer decides between 401 and 403.
"""

from __future__ import annotations

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from hostgate.auth.models import ANONYMOUS, CredentialResult
from hostgate.auth.tokens import TokenValidator
from hostgate.observability.logging import get_logger

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def token_validator_from_app(request: Request) -> TokenValidator:
    # The validator is created on app startup in `hostgate.api.app.create_app`.
    return request.app.state.token_validator  # type: ignore[attr-defined]


def get_credentials(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    validator: TokenValidator = Depends(token_validator_from_app),
) -> CredentialResult:
    if creds is None:
        # HTTPBearer also returns None for "Bearer" with an empty token; that was still
        # a presented (and failed) credential, not an anonymous request.
        scheme, _, _ = request.headers.get("authorization", "").strip().partition(" ")
        if scheme.lower() == "bearer":
            log.info("credential_rejected", reason="empty_token")
            return CredentialResult(presented=True)
        return ANONYMOUS

    token = creds.credentials.strip()
    if not validator.validate(token):
        log.info("credential_rejected", reason="unknown_token")
        return CredentialResult(presented=True)

    principal = validator.resolve_principal(token)
    if principal is None:
        log.warning("credential_rejected", reason="unresolvable_principal")
        return CredentialResult(presented=True)

    log.debug("credential_accepted", subject=principal.subject)
    return CredentialResult(presented=True, principal=principal)


# --- Module Notes -----------------------------------------------------------
# Other auth schemes (Basic, API-key headers) are treated as "not presented": only
# bearer credentials participate in the challenge/forbidden split.
