"""
OpenWeatherMap client.

Thin async wrapper over the ``/weather`` and ``/forecast`` endpoints
(metric units).  Every transport or payload problem surfaces as
``UpstreamError``; a 404 from the provider means the location is unknown
and surfaces as ``NotFoundError``.  No retries: callers decide.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from gocabs.domain.entities import CurrentConditions, ForecastEntry
from gocabs.domain.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)


class OpenWeatherMapClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openweathermap.org/data/2.5",
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_current(self, location: str) -> CurrentConditions:
        payload = await self._get("/weather", location)
        try:
            return CurrentConditions(
                condition=payload["weather"][0]["main"],
                temperature=float(payload["main"]["temp"]),
                humidity=float(payload["main"]["humidity"]),
                wind_speed=float(payload.get("wind", {}).get("speed", 0.0)),
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise UpstreamError(f"Malformed weather payload for {location}") from exc

    async def fetch_forecast(self, location: str, count: int) -> list[ForecastEntry]:
        payload = await self._get("/forecast", location, cnt=count)
        try:
            return [
                ForecastEntry(
                    time=datetime.fromtimestamp(item["dt"], tz=timezone.utc),
                    condition=item["weather"][0]["main"],
                    temperature=float(item["main"]["temp"]),
                    humidity=float(item["main"]["humidity"]),
                    wind_speed=float(item.get("wind", {}).get("speed", 0.0)),
                )
                for item in payload["list"][:count]
            ]
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise UpstreamError(f"Malformed forecast payload for {location}") from exc

    async def _get(self, path: str, location: str, **params: Any) -> dict:
        query = {"q": location, "appid": self.api_key, "units": "metric", **params}
        try:
            response = await self._client.get(path, params=query)
        except httpx.HTTPError as exc:
            logger.warning("Weather provider unreachable (%s): %s", path, exc)
            raise UpstreamError(f"Weather provider unreachable: {exc}") from exc

        if response.status_code == 404:
            raise NotFoundError(f"Unknown location: {location}")
        if response.is_error:
            logger.warning(
                "Weather provider returned %d for %s", response.status_code, path
            )
            raise UpstreamError(
                f"Weather provider returned HTTP {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError("Weather provider returned invalid JSON") from exc
