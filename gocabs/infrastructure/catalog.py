"""
Static reference data: the default landmark set and subscription plans.

Landmarks 6-25 are generated around the city centre with a fixed seed so
that every process serves the same directory.
"""

from __future__ import annotations

import random

from gocabs.domain.entities import Landmark, SubscriptionPlan
from gocabs.domain.enums import LandmarkCategory, PlanType
from gocabs.domain.landmarks import LandmarkDirectory

CENTRE_LAT, CENTRE_LNG = 40.7128, -74.006
GENERATED_LANDMARKS = 20
GENERATOR_SEED = 2024

NAMED_LANDMARKS = [
    Landmark(
        id="lm1",
        name="Central Mall",
        address="123 Shopping Ave",
        lat=40.7128,
        lng=-74.006,
        category=LandmarkCategory.MALL,
        description="Main entrance on north side",
    ),
    Landmark(
        id="lm2",
        name="Grand Hotel",
        address="456 Luxury Blvd",
        lat=40.7138,
        lng=-74.013,
        category=LandmarkCategory.HOTEL,
        description="Valet parking available",
    ),
    Landmark(
        id="lm3",
        name="City Park",
        address="789 Green St",
        lat=40.7118,
        lng=-74.009,
        category=LandmarkCategory.PARK,
        description="East entrance near the fountain",
    ),
    Landmark(
        id="lm4",
        name="Downtown Bus Station",
        address="101 Transit Rd",
        lat=40.7148,
        lng=-74.007,
        category=LandmarkCategory.STATION,
        description="Main terminal building",
    ),
    Landmark(
        id="lm5",
        name="Seafood Palace",
        address="202 Ocean Dr",
        lat=40.7158,
        lng=-74.003,
        category=LandmarkCategory.RESTAURANT,
        description="Front entrance with blue awning",
    ),
]


def generate_landmarks(count: int = GENERATED_LANDMARKS, seed: int = GENERATOR_SEED) -> list[Landmark]:
    rng = random.Random(seed)
    categories = list(LandmarkCategory)
    first = len(NAMED_LANDMARKS) + 1
    return [
        Landmark(
            id=f"lm{n}",
            name=f"Landmark {n}",
            address=f"{100 + i} Mock Street",
            lat=round(CENTRE_LAT + rng.uniform(-0.01, 0.01), 6),
            lng=round(CENTRE_LNG + rng.uniform(-0.01, 0.01), 6),
            category=rng.choice(categories),
            description=f"Description for Landmark {n}",
        )
        for i, n in enumerate(range(first, first + count))
    ]


def default_directory() -> LandmarkDirectory:
    return LandmarkDirectory(NAMED_LANDMARKS + generate_landmarks())


SUBSCRIPTION_PLANS = [
    SubscriptionPlan(
        id=1,
        plan_type=PlanType.BASIC,
        title="Basic Plan",
        price=499.0,
        rides_per_month=10,
        description="Perfect for occasional riders",
        features=(
            "10 rides per month",
            "No surge pricing",
            "Valid for 30 days",
            "Standard rides only",
        ),
    ),
    SubscriptionPlan(
        id=2,
        plan_type=PlanType.PREMIUM,
        title="Premium Plan",
        price=899.0,
        rides_per_month=25,
        description="Great for regular commuters",
        features=(
            "25 rides per month",
            "No surge pricing",
            "Priority pickup",
            "Valid for 30 days",
            "Standard & Premium rides",
        ),
    ),
    SubscriptionPlan(
        id=3,
        plan_type=PlanType.UNLIMITED,
        title="Unlimited Plan",
        price=1499.0,
        rides_per_month=999,
        description="For daily travelers",
        features=(
            "Unlimited rides (max 3 per day)",
            "No surge pricing",
            "Priority pickup",
            "24/7 customer support",
            "All ride types included",
            "Valid for 30 days",
        ),
    ),
]
