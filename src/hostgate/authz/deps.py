"""
hostgate.authz.deps

FastAPI dependency functions for authorization.

Responsibilities:
- Enforce an `AccessRule` per endpoint via a reusable dependency factory.
- Map `unauthenticated` to 401 + bearer challenge and `forbidden` to a plain 403.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from hostgate.auth.deps import get_credentials
from hostgate.auth.models import CredentialResult, Principal
from hostgate.authz.engine import AccessRule, AuthorizationRequest, CompositeAuthorizer, FailureKind
from hostgate.settings import Settings


def authorizer_from_app(request: Request) -> CompositeAuthorizer:
    # The authorizer is created on app startup in `hostgate.api.app.create_app`.
    return request.app.state.authorizer  # type: ignore[attr-defined]


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def bearer_challenge(request: Request, realm: str | None) -> str:
    host = realm or request.headers.get("host") or request.url.netloc
    return f'Bearer realm="{host}", charset="UTF-8"'


def require_access(rule: AccessRule):
    def _dep(
        request: Request,
        credentials: CredentialResult = Depends(get_credentials),
        authorizer: CompositeAuthorizer = Depends(authorizer_from_app),
        settings: Settings = Depends(settings_from_app),
    ) -> Principal | None:
        # Transport peer only; forwarding headers are not trusted for authorization.
        origin = request.client.host if request.client else None
        decision = authorizer.authorize(
            AuthorizationRequest(origin=origin, credentials=credentials),
            rule,
        )
        if decision.allowed:
            return credentials.principal

        # Response bodies never say which requirement failed.
        if decision.failure_kind is FailureKind.unauthenticated:
            raise HTTPException(
                status_code=HTTP_401_UNAUTHORIZED,
                detail="Unauthorized",
                headers={"WWW-Authenticate": bearer_challenge(request, settings.auth_realm)},
            )
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Forbidden")

    return _dep


# --- Module Notes -----------------------------------------------------------
# Attach with `APIRouter(dependencies=[Depends(require_access(rules.X))])` for a whole
# group, or per route on a router that carries no group rule.
