"""
Weather service: freshness-window cache in front of the provider.

A stored reading younger than the window (30 min by default) is returned
as is; otherwise the provider is asked, the reading persisted and
returned.  Two concurrent misses for one location may both reach the
provider; the newest row simply wins the next lookup.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable

from gocabs.domain.entities import ForecastEntry, WeatherReading, utcnow
from gocabs.domain.errors import ValidationError

logger = logging.getLogger(__name__)


def normalise_location(location: str) -> str:
    """Cache key for a location: trimmed, single-spaced, lower-case."""
    key = " ".join((location or "").split()).lower()
    if not key:
        raise ValidationError("Location is required")
    return key


class WeatherService:
    def __init__(
        self,
        provider,
        readings,
        freshness: timedelta = timedelta(minutes=30),
        forecast_entries: int = 8,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.provider = provider
        self.readings = readings
        self.freshness = freshness
        self.forecast_entries = forecast_entries
        self._clock = clock

    async def get_condition(self, location: str) -> WeatherReading:
        key = normalise_location(location)
        now = self._clock()

        cached = await self.readings.latest_for_location(key)
        if cached is not None and cached.is_fresh(now, self.freshness):
            logger.debug("Weather cache hit for %s", key)
            return cached

        logger.info("Weather cache miss for %s; fetching from provider", key)
        conditions = await self.provider.fetch_current(key)
        reading = WeatherReading(
            location=key,
            condition=conditions.condition,
            temperature=conditions.temperature,
            humidity=conditions.humidity,
            wind_speed=conditions.wind_speed,
            recorded_at=now,
        )
        return await self.readings.add(reading)

    async def get_forecast(self, location: str) -> list[ForecastEntry]:
        key = normalise_location(location)
        return await self.provider.fetch_forecast(key, self.forecast_entries)
