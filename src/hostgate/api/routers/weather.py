"""
hostgate.api.routers.weather

Demo forecast endpoints, one group per access rule.

Responsibilities:
- `/publicweather`: anonymous.
- `/privateweather`: any valid bearer token.
- `/privateclient1weather`: Partner1 role, token-bound origin and the Partner1 IP policy;
  its `/data` routes use the DataReader/DataWriter rules instead.
- `/samehostweather`: callers on this machine only.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from hostgate.api.forecasts import WeatherForecast, generate_forecast
from hostgate.authz import rules
from hostgate.authz.deps import require_access

public_router = APIRouter(prefix="/publicweather", tags=["Public Weather"])

private_router = APIRouter(
    prefix="/privateweather",
    tags=["Private Weather"],
    dependencies=[Depends(require_access(rules.AUTHENTICATED))],
)

partner1_router = APIRouter(
    prefix="/privateclient1weather",
    tags=["Private Client1 Weather"],
    dependencies=[Depends(require_access(rules.PARTNER1))],
)

# Same prefix, no group rule: each route carries its own.
partner1_data_router = APIRouter(prefix="/privateclient1weather", tags=["Private Client1 Weather"])

same_host_router = APIRouter(
    prefix="/samehostweather",
    tags=["Same Host Weather"],
    dependencies=[Depends(require_access(rules.SAME_HOST))],
)


@public_router.get("/weatherforecast", response_model=list[WeatherForecast])
async def public_forecast() -> list[WeatherForecast]:
    return generate_forecast()


@private_router.get("/weatherforecast", response_model=list[WeatherForecast])
async def private_forecast() -> list[WeatherForecast]:
    return generate_forecast()


@partner1_router.get("/weatherforecast", response_model=list[WeatherForecast])
async def partner1_forecast() -> list[WeatherForecast]:
    return generate_forecast()


@partner1_data_router.get("/data", dependencies=[Depends(require_access(rules.DATA_READER))])
async def partner1_data() -> dict[str, Any]:
    return {"message": "Data for Partner1", "data": [1, 2, 3]}


@partner1_data_router.post("/data", dependencies=[Depends(require_access(rules.DATA_WRITER))])
async def partner1_post_data(payload: dict[str, Any]) -> dict[str, Any]:
    return {"message": "Data created for Partner1", "received_data": payload}


@same_host_router.get("/weatherforecast", response_model=list[WeatherForecast])
async def same_host_forecast() -> list[WeatherForecast]:
    return generate_forecast()


routers = (public_router, private_router, partner1_router, partner1_data_router, same_host_router)


# --- Module Notes -----------------------------------------------------------
# Rules run as router dependencies, so a denied request never reaches the handler.
