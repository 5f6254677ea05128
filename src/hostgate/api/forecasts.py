"""
hostgate.api.forecasts

Demo payload generator.

Responsibilities:
- Produce random weather forecasts for the guarded demo endpoints.
"""

from __future__ import annotations

import datetime as dt
import random

from pydantic import BaseModel, computed_field

SUMMARIES = (
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
)


class WeatherForecast(BaseModel):
    date: dt.date
    temperature_c: int
    summary: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def temperature_f(self) -> int:
        return 32 + int(self.temperature_c / 0.5556)


def generate_forecast(days: int = 5) -> list[WeatherForecast]:
    today = dt.date.today()
    return [
        WeatherForecast(
            date=today + dt.timedelta(days=i),
            temperature_c=random.randint(-20, 54),
            summary=random.choice(SUMMARIES),
        )
        for i in range(1, days + 1)
    ]
