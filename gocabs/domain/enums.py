"""Domain enumerations and state-transition rules."""

import enum


class NegotiationStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COUNTERED = "countered"
    COUNTER_ACCEPTED = "counter_accepted"
    EXPIRED = "expired"


# State machine: maps current status -> set of valid next statuses
NEGOTIATION_TRANSITIONS: dict[NegotiationStatus, set[NegotiationStatus]] = {
    NegotiationStatus.PENDING: {
        NegotiationStatus.ACCEPTED,
        NegotiationStatus.REJECTED,
        NegotiationStatus.COUNTERED,
        NegotiationStatus.EXPIRED,
    },
    NegotiationStatus.COUNTERED: {
        NegotiationStatus.COUNTER_ACCEPTED,
        NegotiationStatus.REJECTED,
        NegotiationStatus.EXPIRED,
    },
    NegotiationStatus.ACCEPTED: set(),
    NegotiationStatus.REJECTED: set(),
    NegotiationStatus.COUNTER_ACCEPTED: set(),
    NegotiationStatus.EXPIRED: set(),
}

LIVE_STATUSES = frozenset(
    status for status, targets in NEGOTIATION_TRANSITIONS.items() if targets
)
TERMINAL_STATUSES = frozenset(NegotiationStatus) - LIVE_STATUSES


class DriverDecision(str, enum.Enum):
    """What a driver may answer to a pending offer."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COUNTERED = "countered"


class LandmarkCategory(str, enum.Enum):
    MALL = "mall"
    RESTAURANT = "restaurant"
    HOTEL = "hotel"
    PARK = "park"
    STATION = "station"
    OTHER = "other"


class PlanType(str, enum.Enum):
    BASIC = "basic"
    PREMIUM = "premium"
    UNLIMITED = "unlimited"


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
