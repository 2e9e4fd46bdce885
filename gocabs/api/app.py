"""
FastAPI application factory.

* Registers routes for negotiations, weather, landmarks, subscriptions
  and admin.
* Opens / closes the weather provider client via lifespan events.
* Applies rate-limiting middleware and the error-envelope handlers.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from gocabs.api.errors import register_exception_handlers
from gocabs.api.middleware import limiter
from gocabs.api.routes import admin, landmarks, negotiations, subscriptions, weather
from gocabs.config import settings
from gocabs.infrastructure.weather_client import OpenWeatherMapClient

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the weather provider client on startup; close it on shutdown."""
    if not settings.weather_api_key:
        logger.warning("WEATHER_API_KEY is not set; weather lookups will fail")
    app.state.weather_provider = OpenWeatherMapClient(
        api_key=settings.weather_api_key,
        base_url=settings.weather_api_url,
        timeout=settings.weather_timeout_seconds,
    )
    yield
    await app.state.weather_provider.aclose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="GoCabs API",
        description=(
            "Fare negotiation between riders and drivers, weather-aware "
            "fare adjustments, landmark search and monthly ride passes."
        ),
        version=admin.API_VERSION,
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Routers
    app.include_router(negotiations.router, prefix="/api/v1")
    app.include_router(weather.router, prefix="/api/v1")
    app.include_router(landmarks.router, prefix="/api/v1")
    app.include_router(subscriptions.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
