"""Centralised application settings loaded from environment / .env file."""

from typing import Optional

from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "gocabs"
    db_password: str = "gocabs"
    db_name: str = "gocabs_db"
    database_url: Optional[str] = None  # full async URL, overrides the parts above

    # Negotiation / weather-reading storage: "database" or "memory"
    storage_backend: str = "database"

    # Weather provider (OpenWeatherMap)
    weather_api_key: str = ""
    weather_api_url: str = "https://api.openweathermap.org/data/2.5"
    weather_timeout_seconds: float = 5.0
    weather_freshness_minutes: int = 30
    forecast_entries: int = 8

    # Fare negotiation band, as a fraction of the estimated fare
    min_offer_ratio: float = 0.7
    max_offer_ratio: float = 1.1

    # API
    rate_limit: str = "100/minute"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


settings = Settings()
