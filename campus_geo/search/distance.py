"""Great-circle distance on a spherical Earth."""

from __future__ import annotations

from math import asin, cos, radians, sin, sqrt

from campus_geo.core.constants import EARTH_RADIUS_KM


def haversine_km(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    *,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Compute the Haversine distance in kilometres between two points.

    Args:
        lat1: Latitude of the first point, in degrees.
        lng1: Longitude of the first point, in degrees.
        lat2: Latitude of the second point, in degrees.
        lng2: Longitude of the second point, in degrees.
        radius_km: Sphere radius (mean Earth radius by default).
    """
    phi1 = radians(lat1)
    phi2 = radians(lat2)
    dphi = phi2 - phi1
    dlmb = radians(lng2 - lng1)

    h = sin(dphi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(dlmb / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    return 2 * radius_km * asin(sqrt(min(1.0, h)))
