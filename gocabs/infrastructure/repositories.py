"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work), exposes
domain-relevant queries only, and speaks domain entities rather than ORM
rows.  ``gocabs.infrastructure.memory`` provides drop-in in-memory
counterparts with the same method names.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import NegotiationModel, WeatherReadingModel
from gocabs.domain.entities import Negotiation, WeatherReading, ensure_utc
from gocabs.domain.enums import LIVE_STATUSES, NegotiationStatus
from gocabs.domain.errors import ConflictError


def _to_negotiation(row: NegotiationModel) -> Negotiation:
    return Negotiation(
        id=row.id,
        ride_id=row.ride_id,
        rider_id=row.rider_id,
        driver_id=row.driver_id,
        rider_offer=row.rider_offer,
        driver_counter_offer=row.driver_counter_offer,
        status=NegotiationStatus(row.status),
        created_at=ensure_utc(row.created_at),
        updated_at=ensure_utc(row.updated_at),
    )


def _to_reading(row: WeatherReadingModel) -> WeatherReading:
    return WeatherReading(
        id=row.id,
        location=row.location,
        condition=row.condition,
        temperature=row.temperature,
        humidity=row.humidity,
        wind_speed=row.wind_speed,
        recorded_at=ensure_utc(row.recorded_at),
    )


class NegotiationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, negotiation: Negotiation) -> Negotiation:
        row = NegotiationModel(
            ride_id=negotiation.ride_id,
            rider_id=negotiation.rider_id,
            driver_id=negotiation.driver_id,
            rider_offer=negotiation.rider_offer,
            driver_counter_offer=negotiation.driver_counter_offer,
            status=negotiation.status,
            created_at=negotiation.created_at,
            updated_at=negotiation.updated_at,
        )
        self.session.add(row)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # the partial unique index lost a race with another creation
            raise ConflictError(
                f"Ride {negotiation.ride_id} already has a live negotiation"
            ) from exc
        negotiation.id = row.id
        return negotiation

    async def get_by_id(self, negotiation_id: int) -> Optional[Negotiation]:
        result = await self.session.execute(
            select(NegotiationModel)
            .where(NegotiationModel.id == negotiation_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        return _to_negotiation(row) if row else None

    async def get_live_for_ride(self, ride_id: str) -> Optional[Negotiation]:
        result = await self.session.execute(
            select(NegotiationModel).where(
                NegotiationModel.ride_id == ride_id,
                NegotiationModel.status.in_(list(LIVE_STATUSES)),
            )
            .execution_options(populate_existing=True)
        )
        row = result.scalars().first()
        return _to_negotiation(row) if row else None

    async def list_for_ride(self, ride_id: str) -> list[Negotiation]:
        result = await self.session.execute(
            select(NegotiationModel)
            .where(NegotiationModel.ride_id == ride_id)
            .order_by(NegotiationModel.created_at, NegotiationModel.id)
            .execution_options(populate_existing=True)
        )
        return [_to_negotiation(row) for row in result.scalars().all()]

    async def save_transition(
        self, negotiation: Negotiation, expected: NegotiationStatus
    ) -> bool:
        """Conditional write: only succeeds while the row is still *expected*.

        Returns False when another transition got there first.
        """
        result = await self.session.execute(
            update(NegotiationModel)
            .where(
                NegotiationModel.id == negotiation.id,
                NegotiationModel.status == expected,
            )
            .values(
                status=negotiation.status,
                driver_id=negotiation.driver_id,
                driver_counter_offer=negotiation.driver_counter_offer,
                updated_at=negotiation.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


class WeatherReadingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def latest_for_location(self, location: str) -> Optional[WeatherReading]:
        result = await self.session.execute(
            select(WeatherReadingModel)
            .where(WeatherReadingModel.location == location)
            .order_by(
                WeatherReadingModel.recorded_at.desc(),
                WeatherReadingModel.id.desc(),
            )
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return _to_reading(row) if row else None

    async def add(self, reading: WeatherReading) -> WeatherReading:
        row = WeatherReadingModel(
            location=reading.location,
            condition=reading.condition,
            temperature=reading.temperature,
            humidity=reading.humidity,
            wind_speed=reading.wind_speed,
            recorded_at=reading.recorded_at,
        )
        self.session.add(row)
        await self.session.flush()
        reading.id = row.id
        return reading
