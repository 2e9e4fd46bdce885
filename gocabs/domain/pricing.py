"""
Fare adjustments and negotiation bounds
=======================================

Weather multiplier
------------------
Adjusted_Fare = Base_Fare x Multiplier(condition)

* rain, drizzle  -> 1.20
* snow           -> 1.35
* thunderstorm   -> 1.50
* fog, mist      -> 1.15
* anything else  -> 1.00

The lookup is total: unknown, empty or oddly-cased input never raises.

Offer band
----------
A rider offer made against a known estimate must fall inside
``[min_ratio x estimate, max_ratio x estimate]`` (70 %-110 % by default).

Complexity: O(1) per call.
"""

from __future__ import annotations

import math
from typing import Optional

from .errors import ValidationError

DEFAULT_MULTIPLIER = 1.0

WEATHER_MULTIPLIERS: dict[str, float] = {
    "rain": 1.20,
    "drizzle": 1.20,
    "snow": 1.35,
    "thunderstorm": 1.50,
    "fog": 1.15,
    "mist": 1.15,
}


def get_adjustment(condition: Optional[str]) -> float:
    """Return the fare multiplier for a weather *condition*."""
    if not condition:
        return DEFAULT_MULTIPLIER
    return WEATHER_MULTIPLIERS.get(condition.strip().lower(), DEFAULT_MULTIPLIER)


def adjustment_message(condition: Optional[str]) -> str:
    multiplier = get_adjustment(condition)
    if multiplier == DEFAULT_MULTIPLIER:
        return "No price adjustment for current weather"
    surge = round((multiplier - 1) * 100)
    return f"{surge}% surge applied due to {condition.strip().lower()} weather"


def apply_adjustment(base_fare: float, condition: Optional[str]) -> float:
    return round(base_fare * get_adjustment(condition), 2)


def offer_band(
    estimated_fare: float, min_ratio: float = 0.7, max_ratio: float = 1.1
) -> tuple[float, float]:
    return round(estimated_fare * min_ratio, 2), round(estimated_fare * max_ratio, 2)


def validate_offer(
    amount: float,
    estimated_fare: Optional[float] = None,
    min_ratio: float = 0.7,
    max_ratio: float = 1.1,
) -> None:
    """Raise ``ValidationError`` if *amount* is not an acceptable offer."""
    if amount is None or not math.isfinite(amount) or amount < 0:
        raise ValidationError("Offer amount must be a non-negative number")
    if estimated_fare is None:
        return
    if not math.isfinite(estimated_fare) or estimated_fare < 0:
        raise ValidationError("Estimated fare must be a non-negative number")
    low, high = offer_band(estimated_fare, min_ratio, max_ratio)
    if not low <= amount <= high:
        raise ValidationError(
            f"Offer must be between {low:.2f} and {high:.2f} "
            f"for an estimated fare of {estimated_fare:.2f}"
        )
