"""
Landmark directory.

The directory is an explicit store object handed to the API through
dependency injection, so tests can build their own instead of mutating
shared state.  Queries return ``LandmarkMatches``: a lazy view that
re-scans the directory every time it is iterated.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional

from .distance import euclidean_degrees
from .entities import Landmark
from .errors import ConflictError, NotFoundError, ValidationError


class LandmarkMatches:
    """Finite, restartable sequence of landmarks passing a predicate."""

    def __init__(
        self, source: Iterable[Landmark], predicate: Callable[[Landmark], bool]
    ):
        self._source = source
        self._predicate = predicate

    def __iter__(self) -> Iterator[Landmark]:
        return (lm for lm in self._source if self._predicate(lm))


class LandmarkDirectory:
    def __init__(self, landmarks: Iterable[Landmark] = ()):
        self._landmarks: dict[str, Landmark] = {}
        for landmark in landmarks:
            self.add(landmark)

    def __len__(self) -> int:
        return len(self._landmarks)

    # ── writes ────────────────────────────────────────────────────

    def add(self, landmark: Landmark) -> Landmark:
        if landmark.id in self._landmarks:
            raise ConflictError(f"Landmark {landmark.id} already exists")
        self._landmarks[landmark.id] = landmark
        return landmark

    # ── reads ─────────────────────────────────────────────────────

    def all(self) -> list[Landmark]:
        return list(self._landmarks.values())

    def get(self, landmark_id: str) -> Landmark:
        landmark = self._landmarks.get(landmark_id)
        if landmark is None:
            raise NotFoundError(f"Landmark {landmark_id} not found")
        return landmark

    def search(self, query: Optional[str]) -> LandmarkMatches:
        """Case-insensitive substring match on name, category and address.

        A blank query matches nothing.
        """
        needle = (query or "").strip().lower()
        if not needle:
            return LandmarkMatches((), lambda lm: False)

        def matches(lm: Landmark) -> bool:
            return (
                needle in lm.name.lower()
                or needle in lm.category.value
                or needle in lm.address.lower()
            )

        return LandmarkMatches(self._landmarks.values(), matches)

    def nearby(self, lat: float, lng: float, radius: float = 1.0) -> LandmarkMatches:
        if radius < 0:
            raise ValidationError("Radius cannot be negative")
        return LandmarkMatches(
            self._landmarks.values(),
            lambda lm: euclidean_degrees(lat, lng, lm.lat, lm.lng) <= radius,
        )
