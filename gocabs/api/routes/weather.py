"""
Weather endpoints
=================

GET /api/v1/weather/current/{location}     -- cached or freshly fetched reading
GET /api/v1/weather/forecast/{location}    -- short forecast, never cached
GET /api/v1/weather/adjustment/{condition} -- fare multiplier (always 200)
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from gocabs.api.dependencies import get_weather_service
from gocabs.api.middleware import RATE_LIMIT, limiter
from gocabs.api.schemas import (
    ErrorResponse,
    ForecastEntryResponse,
    WeatherAdjustmentResponse,
    WeatherReadingResponse,
)
from gocabs.domain.pricing import adjustment_message, apply_adjustment, get_adjustment
from gocabs.services.weather import WeatherService

router = APIRouter(prefix="/weather", tags=["weather"])

_UPSTREAM = {404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.get(
    "/current/{location}",
    response_model=WeatherReadingResponse,
    summary="Current weather for a location",
    responses=_UPSTREAM,
)
@limiter.limit(RATE_LIMIT)
async def get_current_weather(
    request: Request,
    location: str,
    service: WeatherService = Depends(get_weather_service),
):
    reading = await service.get_condition(location)
    return WeatherReadingResponse.model_validate(reading)


@router.get(
    "/forecast/{location}",
    response_model=list[ForecastEntryResponse],
    summary="Short forecast for a location",
    responses=_UPSTREAM,
)
@limiter.limit(RATE_LIMIT)
async def get_weather_forecast(
    request: Request,
    location: str,
    service: WeatherService = Depends(get_weather_service),
):
    entries = await service.get_forecast(location)
    return [ForecastEntryResponse.model_validate(e) for e in entries]


@router.get(
    "/adjustment/{condition}",
    response_model=WeatherAdjustmentResponse,
    summary="Fare multiplier for a weather condition",
)
@limiter.limit(RATE_LIMIT)
async def get_weather_adjustment(
    request: Request,
    condition: str,
    base_fare: Optional[float] = Query(None, ge=0),
):
    return WeatherAdjustmentResponse(
        condition=condition,
        adjustment=get_adjustment(condition),
        message=adjustment_message(condition),
        adjusted_fare=(
            apply_adjustment(base_fare, condition) if base_fare is not None else None
        ),
    )
