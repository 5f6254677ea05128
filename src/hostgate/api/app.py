"""
hostgate.api.app

FastAPI app factory for the hostgate service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Compose the authorization engine (policies, same-host registry, token store) once.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from hostgate import __version__
from hostgate.api.routers.admin import router as admin_router
from hostgate.api.routers.health import router as health_router
from hostgate.api.routers.weather import routers as weather_routers
from hostgate.auth.tokens import InMemoryTokenStore, TokenValidator
from hostgate.authz.engine import CompositeAuthorizer
from hostgate.authz.policies import PolicyRegistry
from hostgate.authz.rules import DEFAULT_IP_POLICIES
from hostgate.net.origin import OriginRegistry, get_origin_registry
from hostgate.observability.logging import configure_logging, get_logger
from hostgate.observability.middleware import RequestContextMiddleware
from hostgate.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    origin_registry: OriginRegistry | None = None,
    token_validator: TokenValidator | None = None,
) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    origins = origin_registry or get_origin_registry(settings.additional_same_host_addresses)
    policies = PolicyRegistry.from_settings({**DEFAULT_IP_POLICIES, **settings.ip_policies})

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        # Resolve same-host addresses before the first request instead of on it.
        same_host = origins.addresses()
        log.info(
            "startup",
            env=settings.env,
            policies=policies.names(),
            same_host_addresses=sorted(str(a) for a in same_host),
        )
        yield
        log.info("shutdown")

    # API docs are a development convenience only.
    docs_enabled = settings.env == "dev"
    app = FastAPI(
        title="hostgate",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.origin_registry = origins
    app.state.token_validator = token_validator or InMemoryTokenStore.from_settings(settings.tokens)
    app.state.authorizer = CompositeAuthorizer.from_registries(policies, origins)

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    for router in weather_routers:
        app.include_router(router)
    app.include_router(admin_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Tests pass their own `OriginRegistry` (with a fake interface enumerator) so results
# do not depend on the machine running the suite.
