"""
Planar distance between coordinates.

Assumption
----------
Landmark proximity is judged with plain Euclidean distance measured in
degrees, not great-circle distance.  This is only meaningful for small
radii around a city centre; a geodesic or routing-based measure would
replace it for anything wider.

Complexity: O(1) per call.
"""

import math


def euclidean_degrees(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the straight-line distance in **degrees** between two points."""
    return math.hypot(lat2 - lat1, lng2 - lng1)
