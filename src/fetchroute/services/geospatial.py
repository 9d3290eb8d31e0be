"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Optional

from ..models.domain import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance(a: Optional[Coordinate], b: Optional[Coordinate]) -> float:
    """Great-circle distance in kilometers between two coordinates.

    A missing coordinate on either side yields 0.0. Callers that need to
    reject missing locations validate before measuring.
    """

    if a is None or b is None:
        return 0.0
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)
