"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL.  The production models are portable (the partial
unique index is declared for both dialects), so the real repositories run
against it unchanged.  The weather provider is replaced by a scripted fake.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from gocabs.domain.entities import CurrentConditions, ForecastEntry
from gocabs.domain.errors import UpstreamError
from gocabs.infrastructure import models  # noqa: F401  (registers tables)
from gocabs.infrastructure.database import Base


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(TEST_DB_URL, echo=False)
TestSessionFactory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)


# ── Fakes ─────────────────────────────────────────────────────────────


class FakeClock:
    """Callable clock the tests can move forward by hand."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeWeatherProvider:
    def __init__(self, condition: str = "Rain"):
        self.condition = condition
        self.current_calls: list[str] = []
        self.forecast_calls: list[tuple[str, int]] = []
        self.error: Exception | None = None

    async def fetch_current(self, location: str) -> CurrentConditions:
        self.current_calls.append(location)
        if self.error:
            raise self.error
        return CurrentConditions(
            condition=self.condition, temperature=18.5, humidity=71.0, wind_speed=4.2
        )

    async def fetch_forecast(self, location: str, count: int) -> list[ForecastEntry]:
        self.forecast_calls.append((location, count))
        if self.error:
            raise self.error
        start = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
        return [
            ForecastEntry(
                time=start + timedelta(hours=3 * i),
                condition="Clouds" if i % 2 else "Clear",
                temperature=15.0 + i,
                humidity=60.0,
                wind_speed=3.0,
            )
            for i in range(count)
        ]


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield a session, then drop everything."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionFactory() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def weather_provider() -> FakeWeatherProvider:
    return FakeWeatherProvider()


@pytest.fixture
def failing_weather_provider() -> FakeWeatherProvider:
    provider = FakeWeatherProvider()
    provider.error = UpstreamError("connection refused by api.openweathermap.org")
    return provider


@pytest_asyncio.fixture
async def client(weather_provider: FakeWeatherProvider):
    """AsyncClient backed by SQLite, a fake weather provider and fresh stores."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    from gocabs.api.app import create_app
    from gocabs.api.dependencies import (
        get_db,
        get_landmark_directory,
        get_subscription_store,
        get_weather_provider,
    )
    from gocabs.api.middleware import limiter
    from gocabs.infrastructure.catalog import default_directory
    from gocabs.infrastructure.memory import SubscriptionStore

    async def _test_db():
        async with TestSessionFactory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    directory = default_directory()
    subscriptions = SubscriptionStore()

    app = create_app()
    app.dependency_overrides[get_db] = _test_db
    app.dependency_overrides[get_weather_provider] = lambda: weather_provider
    app.dependency_overrides[get_landmark_directory] = lambda: directory
    app.dependency_overrides[get_subscription_store] = lambda: subscriptions
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
