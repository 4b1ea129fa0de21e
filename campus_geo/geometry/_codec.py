"""Geometry codec: heterogeneous coordinate sources to canonical geometry.

Stored campus entities were populated inconsistently over time, so a
coordinate source may be any of (in priority order):

1. a GeoJSON geometry object (``type`` plus an array ``coordinates``);
2. a JSON string of any accepted shape;
3. a mapping with a ``geometry`` member (a GeoJSON Feature or a row);
4. a mapping whose ``coordinates`` member is a JSON string or a mapping
   (embedded geometry, or nested ``coordinates.lng/lat``);
5. a flat record with ``longitude|lng|long`` and ``latitude|lat``.

Every accepted shape is enumerated here; there is no open-ended probing.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from campus_geo.core.constants import (
    LATITUDE_KEYS,
    LINE_STRING,
    LONGITUDE_KEYS,
    MULTI_POLYGON,
    POINT,
    POLYGON,
    SUPPORTED_GEOMETRY_TYPES,
)
from campus_geo.core.exceptions import (
    DecodeError,
    MissingCoordinatesError,
    UnparseableGeometryError,
    UnsupportedGeometryTypeError,
)
from campus_geo.geometry._normalization import (
    check_bounds,
    to_float,
    to_polygons,
    to_position,
    to_positions,
    to_rings,
)
from campus_geo.models.geometry import (
    CanonicalGeometry,
    LineString,
    MultiPolygon,
    Point,
    Polygon,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def decode(source: object) -> CanonicalGeometry:
    """Decode a coordinate source into a canonical geometry.

    Args:
        source: Any of the shapes listed in the module docstring.

    Returns:
        A ``Point``, ``LineString``, ``Polygon`` or ``MultiPolygon``.

    Raises:
        UnparseableGeometryError: If a string source is not valid JSON.
        UnsupportedGeometryTypeError: If ``type`` is not supported.
        MissingCoordinatesError: If no accepted shape matches.
        InvalidCoordinateError: If a position is malformed or out of range.
    """
    if isinstance(source, str | bytes | bytearray):
        return decode(_parse_json(source))

    if not isinstance(source, Mapping):
        msg = f"No coordinates found in {type(source).__name__} source"
        raise MissingCoordinatesError(msg)

    coordinates = source.get("coordinates")

    # (1) GeoJSON geometry object
    if "type" in source and isinstance(coordinates, list | tuple):
        return _decode_geometry_object(source["type"], coordinates)

    # (3) and (4): nested sources, remembered so flat fields can still win
    nested_error: DecodeError | None = None
    for nested in (source.get("geometry"), coordinates):
        if isinstance(nested, str | bytes | bytearray | Mapping):
            try:
                return decode(nested)
            except DecodeError as exc:
                nested_error = nested_error or exc

    # (5) flat lat/lng record
    point = _decode_flat_point(source)
    if point is not None:
        return point

    if nested_error is not None:
        raise nested_error
    # e.g. a GeometryCollection, which carries ``geometries`` instead
    if "type" in source and ("coordinates" in source or "geometries" in source):
        msg = f"Unsupported geometry type: {source['type']!r}"
        raise UnsupportedGeometryTypeError(msg)
    msg = "No coordinates found: expected a GeoJSON geometry or longitude/latitude fields"
    raise MissingCoordinatesError(msg)


def encode(geometry: CanonicalGeometry) -> dict[str, object]:
    """Return the GeoJSON object for a canonical geometry."""
    return geometry.to_geojson()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse_json(text: str | bytes | bytearray) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
        msg = f"Geometry is not valid JSON: {exc}"
        raise UnparseableGeometryError(msg) from exc


def _decode_geometry_object(geom_type: object, coordinates: list | tuple) -> CanonicalGeometry:
    if geom_type not in SUPPORTED_GEOMETRY_TYPES:
        msg = f"Unsupported geometry type: {geom_type!r}"
        raise UnsupportedGeometryTypeError(msg)

    if geom_type == POINT:
        if not coordinates:
            msg = "Point coordinates are empty"
            raise MissingCoordinatesError(msg)
        lng, lat = to_position(coordinates)
        return Point(lng=lng, lat=lat)
    if geom_type == LINE_STRING:
        return LineString(points=to_positions(coordinates))
    if geom_type == POLYGON:
        return Polygon(rings=to_rings(coordinates))
    if geom_type == MULTI_POLYGON:
        return MultiPolygon(polygons=tuple(Polygon(rings=r) for r in to_polygons(coordinates)))

    # Unreachable while SUPPORTED_GEOMETRY_TYPES matches the branches above.
    msg = f"Unsupported geometry type: {geom_type!r}"
    raise UnsupportedGeometryTypeError(msg)


def _first_present(record: Mapping[str, Any], keys: tuple[str, ...]) -> object:
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def _decode_flat_point(record: Mapping[str, Any]) -> Point | None:
    """Build a Point from flat longitude/latitude fields, if both are present."""
    raw_lng = _first_present(record, LONGITUDE_KEYS)
    raw_lat = _first_present(record, LATITUDE_KEYS)
    if raw_lng is None or raw_lat is None:
        return None
    lng = to_float(raw_lng, "Longitude")
    lat = to_float(raw_lat, "Latitude")
    check_bounds(lng, lat)
    return Point(lng=lng, lat=lat)
