"""Initial schema: negotiations and weather readings.

Revision ID: 001
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "001"
down_revision = None
branch_labels = None
depends_on = None

LIVE_PREDICATE = sa.text("status IN ('pending', 'countered')")


def upgrade() -> None:
    # ── negotiations ──────────────────────────────────────────────────
    op.create_table(
        "negotiations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("ride_id", sa.String(64), nullable=False),
        sa.Column("rider_id", sa.String(64), nullable=False),
        sa.Column("driver_id", sa.String(64), nullable=True),
        sa.Column("rider_offer", sa.Float, nullable=False),
        sa.Column("driver_counter_offer", sa.Float, nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                "pending",
                "accepted",
                "rejected",
                "countered",
                "counter_accepted",
                "expired",
                name="negotiation_status",
            ),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_negotiations_ride", "negotiations", ["ride_id"])
    # at most one live negotiation per ride
    op.create_index(
        "uq_negotiations_live_ride",
        "negotiations",
        ["ride_id"],
        unique=True,
        postgresql_where=LIVE_PREDICATE,
        sqlite_where=LIVE_PREDICATE,
    )

    # ── weather_readings ──────────────────────────────────────────────
    op.create_table(
        "weather_readings",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("location", sa.String(120), nullable=False),
        sa.Column("condition", sa.String(40), nullable=False),
        sa.Column("temperature", sa.Float, nullable=False),
        sa.Column("humidity", sa.Float, nullable=False),
        sa.Column("wind_speed", sa.Float, nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "idx_weather_location_time",
        "weather_readings",
        ["location", "recorded_at"],
    )


def downgrade() -> None:
    op.drop_table("weather_readings")
    op.drop_table("negotiations")
    op.execute("DROP TYPE IF EXISTS negotiation_status")
