"""
In-memory stores.

* ``InMemoryNegotiationRepository`` / ``InMemoryWeatherReadingRepository``
  mirror the SQL repositories method for method.  They back the
  ``storage_backend=memory`` mode (local runs without PostgreSQL) and the
  test-suite.
* ``SubscriptionStore`` is the only home of subscription state.

Writes to a negotiation go through a compare-and-set under an
``asyncio.Lock``, which gives the same guarantee as the SQL conditional
update: two transitions from the same status cannot both win.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import replace
from typing import Optional

from gocabs.domain.entities import Negotiation, Subscription, WeatherReading
from gocabs.domain.enums import NegotiationStatus, SubscriptionStatus
from gocabs.domain.errors import ConflictError


class InMemoryNegotiationRepository:
    def __init__(self):
        self._rows: dict[int, Negotiation] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def create(self, negotiation: Negotiation) -> Negotiation:
        async with self._lock:
            if any(
                n.ride_id == negotiation.ride_id and n.is_live
                for n in self._rows.values()
            ):
                raise ConflictError(
                    f"Ride {negotiation.ride_id} already has a live negotiation"
                )
            negotiation.id = next(self._ids)
            self._rows[negotiation.id] = replace(negotiation)
        return negotiation

    async def get_by_id(self, negotiation_id: int) -> Optional[Negotiation]:
        row = self._rows.get(negotiation_id)
        return replace(row) if row else None

    async def get_live_for_ride(self, ride_id: str) -> Optional[Negotiation]:
        for row in self._rows.values():
            if row.ride_id == ride_id and row.is_live:
                return replace(row)
        return None

    async def list_for_ride(self, ride_id: str) -> list[Negotiation]:
        rows = [replace(n) for n in self._rows.values() if n.ride_id == ride_id]
        return sorted(rows, key=lambda n: (n.created_at, n.id))

    async def save_transition(
        self, negotiation: Negotiation, expected: NegotiationStatus
    ) -> bool:
        async with self._lock:
            current = self._rows.get(negotiation.id)
            if current is None or current.status != expected:
                return False
            self._rows[negotiation.id] = replace(negotiation)
            return True


class InMemoryWeatherReadingRepository:
    def __init__(self):
        self._rows: list[WeatherReading] = []
        self._ids = itertools.count(1)

    async def latest_for_location(self, location: str) -> Optional[WeatherReading]:
        matches = [r for r in self._rows if r.location == location]
        if not matches:
            return None
        return max(matches, key=lambda r: (r.recorded_at, r.id))

    async def add(self, reading: WeatherReading) -> WeatherReading:
        reading.id = next(self._ids)
        self._rows.append(reading)
        return reading


class SubscriptionStore:
    def __init__(self):
        self._rows: dict[int, Subscription] = {}
        self._ids = itertools.count(1)

    def add(self, subscription: Subscription) -> Subscription:
        subscription.id = next(self._ids)
        self._rows[subscription.id] = subscription
        return subscription

    def get(self, subscription_id: int) -> Optional[Subscription]:
        return self._rows.get(subscription_id)

    def active_for_user(self, user_id: int) -> Optional[Subscription]:
        for subscription in self._rows.values():
            if (
                subscription.user_id == user_id
                and subscription.status == SubscriptionStatus.ACTIVE
            ):
                return subscription
        return None
