"""FastAPI dependency injection helpers."""

from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gocabs.config import settings
from gocabs.domain.landmarks import LandmarkDirectory
from gocabs.infrastructure.catalog import SUBSCRIPTION_PLANS, default_directory
from gocabs.infrastructure.database import async_session_factory
from gocabs.infrastructure.memory import (
    InMemoryNegotiationRepository,
    InMemoryWeatherReadingRepository,
    SubscriptionStore,
)
from gocabs.infrastructure.repositories import (
    NegotiationRepository,
    WeatherReadingRepository,
)
from gocabs.services.negotiations import NegotiationService
from gocabs.services.subscriptions import SubscriptionService
from gocabs.services.weather import WeatherService

_memory_negotiations = InMemoryNegotiationRepository()
_memory_readings = InMemoryWeatherReadingRepository()
_landmarks = default_directory()
_subscriptions = SubscriptionStore()


async def get_db() -> AsyncSession:  # type: ignore[misc]
    """Yield an async DB session; commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def _use_memory() -> bool:
    return settings.storage_backend == "memory"


def get_negotiation_repository(db: AsyncSession = Depends(get_db)):
    if _use_memory():
        return _memory_negotiations
    return NegotiationRepository(db)


def get_weather_repository(db: AsyncSession = Depends(get_db)):
    if _use_memory():
        return _memory_readings
    return WeatherReadingRepository(db)


def get_weather_provider(request: Request):
    """The provider client opened by the app lifespan."""
    return request.app.state.weather_provider


def get_landmark_directory() -> LandmarkDirectory:
    return _landmarks


def get_subscription_store() -> SubscriptionStore:
    return _subscriptions


def get_negotiation_service(
    repository=Depends(get_negotiation_repository),
) -> NegotiationService:
    return NegotiationService(
        repository,
        min_offer_ratio=settings.min_offer_ratio,
        max_offer_ratio=settings.max_offer_ratio,
    )


def get_weather_service(
    provider=Depends(get_weather_provider),
    readings=Depends(get_weather_repository),
) -> WeatherService:
    return WeatherService(
        provider,
        readings,
        freshness=timedelta(minutes=settings.weather_freshness_minutes),
        forecast_entries=settings.forecast_entries,
    )


def get_subscription_service(
    store: SubscriptionStore = Depends(get_subscription_store),
) -> SubscriptionService:
    return SubscriptionService(store, SUBSCRIPTION_PLANS)
