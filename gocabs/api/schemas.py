"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from gocabs.domain.enums import DriverDecision


# ── Requests ──────────────────────────────────────────────────────────


class NegotiationCreateRequest(BaseModel):
    ride_id: str = Field(..., min_length=1, max_length=64)
    rider_id: str = Field(..., min_length=1, max_length=64)
    rider_offer: float = Field(..., ge=0, allow_inf_nan=False)
    estimated_fare: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="When given, the offer must fall within the configured band of it.",
    )

    model_config = {"str_strip_whitespace": True}


class NegotiationRespondRequest(BaseModel):
    driver_id: str = Field(..., min_length=1, max_length=64)
    decision: DriverDecision
    counter_offer: Optional[float] = Field(
        None,
        ge=0,
        allow_inf_nan=False,
        description="Required when decision is 'countered'.",
    )

    model_config = {"str_strip_whitespace": True}


class SubscriptionPurchaseRequest(BaseModel):
    user_id: int
    plan_id: int


# ── Responses ─────────────────────────────────────────────────────────


class NegotiationResponse(BaseModel):
    id: int
    ride_id: str
    rider_id: str
    driver_id: Optional[str] = None
    rider_offer: float
    driver_counter_offer: Optional[float] = None
    agreed_fare: Optional[float] = None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WeatherReadingResponse(BaseModel):
    location: str
    condition: str
    temperature: float
    humidity: float
    wind_speed: float
    recorded_at: datetime

    model_config = {"from_attributes": True}


class ForecastEntryResponse(BaseModel):
    time: datetime
    condition: str
    temperature: float
    humidity: float
    wind_speed: float

    model_config = {"from_attributes": True}


class WeatherAdjustmentResponse(BaseModel):
    condition: str
    adjustment: float
    message: str
    adjusted_fare: Optional[float] = None


class LandmarkResponse(BaseModel):
    id: str
    name: str
    address: str
    lat: float
    lng: float
    category: str
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class SubscriptionPlanResponse(BaseModel):
    id: int
    plan_type: str
    title: str
    price: float
    rides_per_month: int
    description: str
    features: list[str]
    validity_days: int

    model_config = {"from_attributes": True}


class SubscriptionResponse(BaseModel):
    id: int
    user_id: int
    plan_type: str
    rides_total: int
    rides_remaining: int
    start_date: datetime
    end_date: datetime
    status: str
    price: float
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
