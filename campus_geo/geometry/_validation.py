"""Topology checks for imported polygons.

The codec only guarantees well-formed, in-range positions.  Whether a
polygon is topologically valid (closed, non-self-intersecting) is checked
here with shapely so the import pipeline can log a warning; an invalid
polygon is still imported exactly as uploaded, since its serialized form
is what duplicate detection compares.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campus_geo.models.geometry import MultiPolygon, Polygon

if TYPE_CHECKING:
    from campus_geo.models.geometry import CanonicalGeometry

logger = logging.getLogger("campus_geo.geometry")

# Minimum vertices for a closed ring (3 distinct + closing = 4)
MIN_RING_VERTICES = 4


def explain_invalid(geometry: CanonicalGeometry) -> str:
    """Describe why a polygon geometry is invalid.

    Returns:
        A human-readable explanation, or ``""`` when the geometry is valid
        or is not a polygon type.
    """
    if not isinstance(geometry, Polygon | MultiPolygon):
        return ""

    polygons = geometry.polygons if isinstance(geometry, MultiPolygon) else (geometry,)
    for idx, polygon in enumerate(polygons):
        for ring_idx, ring in enumerate(polygon.rings):
            if len(ring) < MIN_RING_VERTICES:
                return (
                    f"Ring {ring_idx} of polygon {idx} has {len(ring)} vertices, "
                    f"need at least {MIN_RING_VERTICES}"
                )
            if ring[0] != ring[-1]:
                return f"Ring {ring_idx} of polygon {idx} is not closed"

    from shapely.geometry import shape
    from shapely.validation import explain_validity

    try:
        geom = shape(geometry.to_geojson())
    except Exception as exc:
        logger.debug("Shapely build failed | type=%s | error=%s", geometry.geom_type, exc)
        return f"Cannot build polygon: {exc}"

    if geom.is_valid:
        return ""
    return explain_validity(geom)
