"""
hostgate.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) confirming same-host discovery has completed.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request) -> dict[str, str | int]:
    # Readiness: the same-host set is resolved (first call computes it if startup did not).
    origins = request.app.state.origin_registry
    return {"status": "ready", "same_host_addresses": len(origins.addresses())}


# --- Module Notes -----------------------------------------------------------
# Probes are anonymous on purpose; they expose counts, never the addresses themselves.
