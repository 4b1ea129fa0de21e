"""Geometry fingerprinting for exact-duplicate detection.

A fingerprint is compact JSON with a fixed key order (``type`` then
``coordinates``) and every number rendered fixed-point at a set precision
with trailing zeros stripped.  Two decodings of the same geometry always
produce the same string, whatever whitespace, key order or number
spelling (``1``, ``1.0``, ``1e0``) the original payload used.

Fingerprints are order-sensitive: rotating a ring or reversing its
winding produces a different fingerprint, so such polygons are not
treated as duplicates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from campus_geo.core.constants import DEFAULT_FINGERPRINT_PRECISION
from campus_geo.models.geometry import LineString, MultiPolygon, Point, Polygon

if TYPE_CHECKING:
    from collections.abc import Iterable

    from campus_geo.models.geometry import CanonicalGeometry, Position


def fingerprint(
    geometry: CanonicalGeometry,
    *,
    precision: int = DEFAULT_FINGERPRINT_PRECISION,
) -> str:
    """Return the deterministic fingerprint of a canonical geometry.

    Args:
        geometry: A decoded geometry.
        precision: Decimal places kept per coordinate.

    Returns:
        e.g. ``'{"type":"Point","coordinates":[-0.1276,51.5072]}'``
    """
    if isinstance(geometry, Point):
        body = _position(geometry.position, precision)
    elif isinstance(geometry, LineString):
        body = _array(_position(p, precision) for p in geometry.points)
    elif isinstance(geometry, Polygon):
        body = _rings(geometry, precision)
    elif isinstance(geometry, MultiPolygon):
        body = _array(_rings(polygon, precision) for polygon in geometry.polygons)
    else:
        msg = f"Cannot fingerprint {type(geometry).__name__}"
        raise TypeError(msg)
    return f'{{"type":"{geometry.geom_type}","coordinates":{body}}}'


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def format_number(value: float, precision: int) -> str:
    """Render a float fixed-point without trailing zeros (``-0`` becomes ``0``)."""
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def _array(items: Iterable[str]) -> str:
    return "[" + ",".join(items) + "]"


def _position(position: Position, precision: int) -> str:
    return _array(format_number(v, precision) for v in position)


def _rings(polygon: Polygon, precision: int) -> str:
    return _array(_array(_position(p, precision) for p in ring) for ring in polygon.rings)
