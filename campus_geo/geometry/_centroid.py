"""Representative points for ranking and map markers.

The default ``vertex_mean`` strategy averages vertices, matching the
positions the campus map has always placed markers at:

- Point: the point itself.
- LineString: mean of all vertices (not length-weighted).
- Polygon: mean of the exterior ring's vertices, closing vertex included.
- MultiPolygon: mean of the first polygon's exterior ring.

This is not an area centroid and leans toward vertex-dense edges.  The
``area`` strategy computes the true area centroid of polygons with shapely
for callers that want it; points and lines use the vertex mean either way.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from campus_geo.models.geometry import LineString, MultiPolygon, Point, Polygon

if TYPE_CHECKING:
    from collections.abc import Sequence

    from campus_geo.models.geometry import CanonicalGeometry, Position

VERTEX_MEAN = "vertex_mean"
AREA = "area"


def centroid(
    geometry: CanonicalGeometry,
    *,
    strategy: str = VERTEX_MEAN,
) -> tuple[float, float] | None:
    """Reduce a geometry to a single ``(lng, lat)`` point.

    Args:
        geometry: A decoded geometry.
        strategy: ``"vertex_mean"`` (default) or ``"area"``.

    Returns:
        ``(lng, lat)``, or ``None`` if there are no vertices to average.

    Raises:
        ValueError: If *strategy* is unknown.
    """
    if strategy not in (VERTEX_MEAN, AREA):
        msg = f"Unknown centroid strategy: {strategy!r}"
        raise ValueError(msg)

    if isinstance(geometry, Point):
        return geometry.position
    if isinstance(geometry, LineString):
        return vertex_mean(geometry.points)

    if isinstance(geometry, MultiPolygon):
        if not geometry.polygons:
            return None
        if strategy == AREA:
            return _area_centroid(geometry)
        return vertex_mean(geometry.polygons[0].exterior)

    if isinstance(geometry, Polygon):
        if strategy == AREA:
            return _area_centroid(geometry)
        return vertex_mean(geometry.exterior)

    msg = f"Cannot compute centroid of {type(geometry).__name__}"
    raise TypeError(msg)


def vertex_mean(positions: Sequence[Position]) -> tuple[float, float] | None:
    """Arithmetic mean of positions, or ``None`` for an empty sequence."""
    if not positions:
        return None
    count = len(positions)
    return (
        sum(p[0] for p in positions) / count,
        sum(p[1] for p in positions) / count,
    )


def _area_centroid(geometry: Polygon | MultiPolygon) -> tuple[float, float] | None:
    """True area centroid via shapely, falling back to the vertex mean."""
    from shapely.geometry import shape

    try:
        geom = shape(geometry.to_geojson())
    except Exception:
        geom = None

    # Degenerate rings (fewer than 4 vertices, zero area) have no area centroid.
    if geom is None or geom.is_empty or geom.area == 0:
        first = geometry.polygons[0] if isinstance(geometry, MultiPolygon) else geometry
        return vertex_mean(first.exterior)

    point = geom.centroid
    return (point.x, point.y)
