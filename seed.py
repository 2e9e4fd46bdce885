"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 5 sample negotiations (one per status a client is likely to see)
  - 3 sample weather readings
"""

import asyncio
from datetime import timedelta

from sqlalchemy import text

from gocabs.domain.entities import utcnow
from gocabs.domain.enums import NegotiationStatus
from gocabs.infrastructure.database import async_session_factory, engine
from gocabs.infrastructure.models import NegotiationModel, WeatherReadingModel


NEGOTIATIONS = [
    # (ride, rider, offer, driver, counter, status, minutes ago)
    ("ride1", "user1", 20.0, None, None, NegotiationStatus.PENDING, 5),
    ("ride2", "user2", 18.5, "driver1", 22.0, NegotiationStatus.COUNTERED, 12),
    ("ride3", "user3", 31.0, "driver2", None, NegotiationStatus.ACCEPTED, 60),
    ("ride4", "user1", 12.0, "driver3", None, NegotiationStatus.REJECTED, 90),
    ("ride5", "user4", 40.0, "driver1", 45.0, NegotiationStatus.COUNTER_ACCEPTED, 180),
]

READINGS = [
    ("new york", "Clear", 22.5, 55.0, 3.1),
    ("london", "Rain", 14.0, 82.0, 5.4),
    ("mumbai", "Mist", 29.0, 88.0, 2.2),
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM negotiations"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        now = utcnow()

        # ── Negotiations ──────────────────────────────────────────────
        for ride, rider, offer, driver, counter, status, ago in NEGOTIATIONS:
            created = now - timedelta(minutes=ago)
            session.add(
                NegotiationModel(
                    ride_id=ride,
                    rider_id=rider,
                    rider_offer=offer,
                    driver_id=driver,
                    driver_counter_offer=counter,
                    status=status,
                    created_at=created,
                    updated_at=created if driver is None else created + timedelta(minutes=2),
                )
            )
        await session.flush()
        print(f"  Created {len(NEGOTIATIONS)} negotiations")

        # ── Weather readings ──────────────────────────────────────────
        for location, condition, temp, humidity, wind in READINGS:
            session.add(
                WeatherReadingModel(
                    location=location,
                    condition=condition,
                    temperature=temp,
                    humidity=humidity,
                    wind_speed=wind,
                    recorded_at=now,
                )
            )
        await session.flush()
        print(f"  Created {len(READINGS)} weather readings")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
