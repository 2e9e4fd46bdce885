"""
Fare negotiation service
========================

Lifecycle
---------
rider creates (pending) -> driver accepts | rejects | counters
countered -> rider accepts the counter (counter_accepted) | rejects it

Concurrency safety
------------------
Each transition is applied to a fresh copy of the record and persisted
with ``save_transition(expected=<status read>)``.  The store only writes
when the row still carries the expected status, so of two racing
transitions exactly one wins; the other gets ``InvalidStateError``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from gocabs.domain.entities import Negotiation, utcnow
from gocabs.domain.enums import DriverDecision
from gocabs.domain.errors import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from gocabs.domain.pricing import validate_offer

logger = logging.getLogger(__name__)


class NegotiationService:
    def __init__(
        self,
        repository,
        min_offer_ratio: float = 0.7,
        max_offer_ratio: float = 1.1,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.min_offer_ratio = min_offer_ratio
        self.max_offer_ratio = max_offer_ratio
        self._clock = clock

    async def create_negotiation(
        self,
        ride_id: str,
        rider_id: str,
        offer_amount: float,
        estimated_fare: Optional[float] = None,
    ) -> Negotiation:
        if not (ride_id or "").strip() or not (rider_id or "").strip():
            raise ValidationError("ride_id and rider_id are required")
        validate_offer(
            offer_amount, estimated_fare, self.min_offer_ratio, self.max_offer_ratio
        )

        live = await self.repository.get_live_for_ride(ride_id)
        if live is not None:
            raise ConflictError(
                f"Ride {ride_id} already has a live negotiation ({live.id})"
            )

        now = self._clock()
        negotiation = await self.repository.create(
            Negotiation(
                ride_id=ride_id,
                rider_id=rider_id,
                rider_offer=offer_amount,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "Negotiation %s created for ride %s (offer=%.2f)",
            negotiation.id, ride_id, offer_amount,
        )
        return negotiation

    async def get_negotiation(self, negotiation_id: int) -> Negotiation:
        negotiation = await self.repository.get_by_id(negotiation_id)
        if negotiation is None:
            raise NotFoundError(f"Negotiation {negotiation_id} not found")
        return negotiation

    async def get_negotiations_for_ride(self, ride_id: str) -> list[Negotiation]:
        return await self.repository.list_for_ride(ride_id)

    async def respond(
        self,
        negotiation_id: int,
        driver_id: str,
        decision: DriverDecision,
        counter_offer: Optional[float] = None,
    ) -> Negotiation:
        if not (driver_id or "").strip():
            raise ValidationError("driver_id is required")
        negotiation = await self.get_negotiation(negotiation_id)
        expected = negotiation.status
        negotiation.respond(driver_id, decision, counter_offer, at=self._clock())
        await self._persist(negotiation, expected)
        logger.info(
            "Driver %s %s negotiation %s", driver_id, negotiation.status.value,
            negotiation_id,
        )
        return negotiation

    async def accept_counter_offer(self, negotiation_id: int) -> Negotiation:
        negotiation = await self.get_negotiation(negotiation_id)
        expected = negotiation.status
        negotiation.accept_counter_offer(at=self._clock())
        await self._persist(negotiation, expected)
        logger.info(
            "Counter offer %.2f accepted on negotiation %s",
            negotiation.driver_counter_offer, negotiation_id,
        )
        return negotiation

    async def reject_counter_offer(self, negotiation_id: int) -> Negotiation:
        negotiation = await self.get_negotiation(negotiation_id)
        expected = negotiation.status
        negotiation.reject_counter_offer(at=self._clock())
        await self._persist(negotiation, expected)
        logger.info("Counter offer rejected on negotiation %s", negotiation_id)
        return negotiation

    async def _persist(self, negotiation: Negotiation, expected) -> None:
        if not await self.repository.save_transition(negotiation, expected):
            logger.info(
                "Lost update on negotiation %s (expected %s)",
                negotiation.id, expected.value,
            )
            raise InvalidStateError(
                f"Negotiation {negotiation.id} is no longer {expected.value}"
            )
