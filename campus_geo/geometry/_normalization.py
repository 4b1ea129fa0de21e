"""Coordinate normalization helpers for the geometry codec.

Responsibilities:
- Convert a raw coordinate pair to a clean ``(lon, lat)`` tuple
- Walk GeoJSON coordinate nesting for each supported geometry type
- Enforce finiteness and WGS 84 bounds on every position
"""

from __future__ import annotations

import math

from campus_geo.core.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE
from campus_geo.core.exceptions import InvalidCoordinateError, MissingCoordinatesError
from campus_geo.models.geometry import Position, Ring

# ---------------------------------------------------------------------------
# Scalars and positions
# ---------------------------------------------------------------------------


def to_float(value: object, axis: str) -> float:
    """Convert one coordinate value to a finite float.

    Numeric strings are accepted (stored rows sometimes carry them);
    booleans are not, even though ``bool`` is an ``int``.

    Raises:
        InvalidCoordinateError: If the value is not a finite number.
    """
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        msg = f"{axis} must be a number, got {type(value).__name__}"
        raise InvalidCoordinateError(msg)
    try:
        number = float(value)
    except ValueError as exc:
        msg = f"{axis} is not numeric: {value!r}"
        raise InvalidCoordinateError(msg) from exc
    if not math.isfinite(number):
        msg = f"{axis} is not finite: {value!r}"
        raise InvalidCoordinateError(msg)
    return number


def check_bounds(lng: float, lat: float) -> None:
    """Validate that a position is within WGS 84 bounds.

    Raises:
        InvalidCoordinateError: If either axis is out of range.
    """
    if not (MIN_LONGITUDE <= lng <= MAX_LONGITUDE):
        msg = f"Longitude {lng} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
        raise InvalidCoordinateError(msg)
    if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
        msg = f"Latitude {lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
        raise InvalidCoordinateError(msg)


def to_position(raw: object) -> Position:
    """Convert a GeoJSON position to a ``(lon, lat)`` tuple.

    Drops altitude (third element) if present.

    Raises:
        InvalidCoordinateError: If the position is malformed or out of range.
    """
    if not isinstance(raw, list | tuple):
        msg = f"Malformed position: expected list/tuple, got {type(raw).__name__}"
        raise InvalidCoordinateError(msg)
    if len(raw) < 2:
        msg = f"Malformed position: expected at least 2 elements, got {len(raw)}"
        raise InvalidCoordinateError(msg)
    lng = to_float(raw[0], "Longitude")
    lat = to_float(raw[1], "Latitude")
    check_bounds(lng, lat)
    return (lng, lat)


# ---------------------------------------------------------------------------
# Nested coordinate arrays
# ---------------------------------------------------------------------------


def _require_sequence(raw: object, what: str) -> list | tuple:
    if not isinstance(raw, list | tuple):
        msg = f"{what} must be an array, got {type(raw).__name__}"
        raise MissingCoordinatesError(msg)
    if not raw:
        msg = f"{what} is empty"
        raise MissingCoordinatesError(msg)
    return raw


def to_positions(raw: object, what: str = "LineString coordinates") -> tuple[Position, ...]:
    """Convert an array of positions."""
    return tuple(to_position(p) for p in _require_sequence(raw, what))


def to_rings(raw: object, what: str = "Polygon coordinates") -> tuple[Ring, ...]:
    """Convert an array of linear rings (exterior first)."""
    rings = _require_sequence(raw, what)
    return tuple(to_positions(ring, f"{what} ring {idx}") for idx, ring in enumerate(rings))


def to_polygons(raw: object) -> tuple[tuple[Ring, ...], ...]:
    """Convert a MultiPolygon coordinate array into ring tuples per polygon."""
    polygons = _require_sequence(raw, "MultiPolygon coordinates")
    return tuple(
        to_rings(rings, f"MultiPolygon polygon {idx}") for idx, rings in enumerate(polygons)
    )
