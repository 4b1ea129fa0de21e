"""Geometry codec, fingerprinting and centroids.

The geometry layer is split into focused stages:
- **_normalization**: raw coordinate values → finite, in-range positions
- **_codec**: heterogeneous coordinate sources → canonical geometry
- **_fingerprint**: canonical geometry → stable duplicate-detection key
- **_centroid**: canonical geometry → representative ``(lng, lat)``
- **_validation**: shapely topology checks for polygons

Every function here is pure: no I/O, no shared state.
"""

from __future__ import annotations

from campus_geo.core.exceptions import (
    DecodeError,
    InvalidCoordinateError,
    MissingCoordinatesError,
    UnparseableGeometryError,
    UnsupportedGeometryTypeError,
)
from campus_geo.geometry._centroid import AREA, VERTEX_MEAN, centroid, vertex_mean
from campus_geo.geometry._codec import decode, encode
from campus_geo.geometry._fingerprint import fingerprint, format_number
from campus_geo.geometry._validation import explain_invalid

__all__ = [
    "AREA",
    "VERTEX_MEAN",
    "DecodeError",
    "InvalidCoordinateError",
    "MissingCoordinatesError",
    "UnparseableGeometryError",
    "UnsupportedGeometryTypeError",
    "centroid",
    "decode",
    "encode",
    "explain_invalid",
    "fingerprint",
    "format_number",
    "vertex_mean",
]
