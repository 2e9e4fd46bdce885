"""
SQLAlchemy ORM models.

Tables
------
* ``negotiations``      -- fare negotiations, never deleted
* ``weather_readings``  -- observed weather, newest row per location acts
  as the cache

Indexes
-------
* **Partial unique** on ``negotiations.ride_id`` restricted to live
  statuses (``pending``, ``countered``): at most one live negotiation per
  ride, even under concurrent creation.
* **B-Tree** on ``ride_id`` for history reads and on
  ``(location, recorded_at)`` for the freshness lookup.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    Float,
    Index,
    Integer,
    String,
    text,
)

from .database import Base
from gocabs.domain.entities import utcnow
from gocabs.domain.enums import NegotiationStatus

_LIVE_PREDICATE = text("status IN ('pending', 'countered')")


class NegotiationModel(Base):
    __tablename__ = "negotiations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ride_id = Column(String(64), nullable=False)
    rider_id = Column(String(64), nullable=False)
    driver_id = Column(String(64), nullable=True)
    rider_offer = Column(Float, nullable=False)
    driver_counter_offer = Column(Float, nullable=True)
    status = Column(
        Enum(
            NegotiationStatus,
            name="negotiation_status",
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        default=NegotiationStatus.PENDING,
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_negotiations_ride", "ride_id"),
        Index(
            "uq_negotiations_live_ride",
            "ride_id",
            unique=True,
            postgresql_where=_LIVE_PREDICATE,
            sqlite_where=_LIVE_PREDICATE,
        ),
    )


class WeatherReadingModel(Base):
    __tablename__ = "weather_readings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location = Column(String(120), nullable=False)
    condition = Column(String(40), nullable=False)
    temperature = Column(Float, nullable=False)
    humidity = Column(Float, nullable=False)
    wind_speed = Column(Float, nullable=False)
    recorded_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_weather_location_time", "location", "recorded_at"),
    )
