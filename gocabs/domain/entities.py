"""
Domain entities with business logic.

Patterns used
-------------
- **State Pattern** on ``Negotiation``: enforces valid lifecycle transitions
  (pending -> accepted | rejected | countered, countered -> counter_accepted
  | rejected) through the central ``NEGOTIATION_TRANSITIONS`` table.
- ``Subscription.cancel`` guards the only subscription transition exposed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from .enums import (
    LIVE_STATUSES,
    NEGOTIATION_TRANSITIONS,
    DriverDecision,
    LandmarkCategory,
    NegotiationStatus,
    PlanType,
    SubscriptionStatus,
)
from .errors import InvalidStateError, ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops the offset)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ── Negotiation ───────────────────────────────────────────────────────


@dataclass
class Negotiation:
    ride_id: str
    rider_id: str
    rider_offer: float
    id: Optional[int] = None
    driver_id: Optional[str] = None
    driver_counter_offer: Optional[float] = None
    status: NegotiationStatus = NegotiationStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def is_live(self) -> bool:
        return self.status in LIVE_STATUSES

    @property
    def agreed_fare(self) -> Optional[float]:
        if self.status == NegotiationStatus.ACCEPTED:
            return self.rider_offer
        if self.status == NegotiationStatus.COUNTER_ACCEPTED:
            return self.driver_counter_offer
        return None

    def transition_to(
        self, new_status: NegotiationStatus, at: Optional[datetime] = None
    ) -> None:
        """Move to *new_status* if the transition is legal, else raise."""
        allowed = NEGOTIATION_TRANSITIONS.get(self.status, set())
        if new_status not in allowed:
            raise InvalidStateError(
                f"Cannot move negotiation from {self.status.value} "
                f"to {new_status.value}"
            )
        self.status = new_status
        self.updated_at = at or utcnow()

    def respond(
        self,
        driver_id: str,
        decision: DriverDecision,
        counter_offer: Optional[float] = None,
        at: Optional[datetime] = None,
    ) -> None:
        if self.status != NegotiationStatus.PENDING:
            raise InvalidStateError(
                f"Negotiation is {self.status.value}; only pending offers "
                "can be answered"
            )
        try:
            decision = DriverDecision(decision)
        except ValueError:
            raise ValidationError(f"Unknown decision: {decision}") from None
        if decision == DriverDecision.COUNTERED:
            if counter_offer is None:
                raise ValidationError("Counter offer is required")
            if not math.isfinite(counter_offer) or counter_offer < 0:
                raise ValidationError("Counter offer must be a non-negative number")
        self.transition_to(NegotiationStatus(decision.value), at)
        self.driver_id = driver_id
        self.driver_counter_offer = (
            counter_offer if decision == DriverDecision.COUNTERED else None
        )

    def accept_counter_offer(self, at: Optional[datetime] = None) -> None:
        if self.status != NegotiationStatus.COUNTERED:
            raise InvalidStateError(
                "This negotiation does not have a counter offer to accept"
            )
        self.transition_to(NegotiationStatus.COUNTER_ACCEPTED, at)

    def reject_counter_offer(self, at: Optional[datetime] = None) -> None:
        if self.status != NegotiationStatus.COUNTERED:
            raise InvalidStateError(
                "This negotiation does not have a counter offer to reject"
            )
        self.transition_to(NegotiationStatus.REJECTED, at)
        self.driver_counter_offer = None


# ── Weather ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CurrentConditions:
    """What the provider reports; the service stamps and stores it."""

    condition: str
    temperature: float
    humidity: float
    wind_speed: float


@dataclass
class WeatherReading:
    location: str
    condition: str
    temperature: float
    humidity: float
    wind_speed: float
    recorded_at: datetime
    id: Optional[int] = None

    def is_fresh(self, now: datetime, window: timedelta) -> bool:
        return now - ensure_utc(self.recorded_at) <= window


@dataclass(frozen=True)
class ForecastEntry:
    time: datetime
    condition: str
    temperature: float
    humidity: float
    wind_speed: float


# ── Landmarks ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Landmark:
    id: str
    name: str
    address: str
    lat: float
    lng: float
    category: LandmarkCategory
    description: Optional[str] = None


# ── Subscriptions ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class SubscriptionPlan:
    id: int
    plan_type: PlanType
    title: str
    price: float
    rides_per_month: int
    description: str
    features: tuple[str, ...] = ()
    validity_days: int = 30


@dataclass
class Subscription:
    user_id: int
    plan_type: PlanType
    rides_total: int
    rides_remaining: int
    start_date: datetime
    end_date: datetime
    price: float
    id: Optional[int] = None
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def cancel(self, at: Optional[datetime] = None) -> None:
        if self.status != SubscriptionStatus.ACTIVE:
            raise InvalidStateError(
                f"Cannot cancel a subscription that is {self.status.value}"
            )
        self.status = SubscriptionStatus.CANCELLED
        self.updated_at = at or utcnow()
