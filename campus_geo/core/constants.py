"""Shared constants: single source of truth.

Centralises geometry type names, coordinate bounds, and numeric defaults
used by the codec, the import pipeline, and the search helpers.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# GeoJSON geometry types
# ---------------------------------------------------------------------------

POINT = "Point"
LINE_STRING = "LineString"
POLYGON = "Polygon"
MULTI_POLYGON = "MultiPolygon"

SUPPORTED_GEOMETRY_TYPES: frozenset[str] = frozenset({POINT, LINE_STRING, POLYGON, MULTI_POLYGON})
"""Geometry types accepted by the codec."""

FEATURE_COLLECTION = "FeatureCollection"

# ---------------------------------------------------------------------------
# WGS 84 coordinate bounds
# ---------------------------------------------------------------------------

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0

# ---------------------------------------------------------------------------
# Flat coordinate field names, in lookup order
# ---------------------------------------------------------------------------

LONGITUDE_KEYS: tuple[str, ...] = ("longitude", "lng", "long")
LATITUDE_KEYS: tuple[str, ...] = ("latitude", "lat")

# ---------------------------------------------------------------------------
# Numeric defaults
# ---------------------------------------------------------------------------

EARTH_RADIUS_KM = 6371.0
"""Mean Earth radius used by the Haversine formula."""

DEFAULT_FINGERPRINT_PRECISION = 7
"""Decimal places kept in a fingerprint (~1 cm at the equator)."""

DEFAULT_SEARCH_RESULT_LIMIT = 5

UNKNOWN_NAME = "Unknown"
"""Display name recorded for features whose name could not be determined."""
