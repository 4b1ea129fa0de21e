"""Bounding boxes for map viewport fitting.

``aggregate`` folds any mix of boxes, geometries, search entities and raw
coordinate sources into one box.  Sources that fail to decode are
skipped; ``None`` means nothing was locatable and the caller should show
its default viewport.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campus_geo.core.exceptions import DecodeError
from campus_geo.geometry import decode
from campus_geo.models.geometry import LineString, MultiPolygon, Point, Polygon
from campus_geo.models.search import BoundingBox, EntityForSearch

if TYPE_CHECKING:
    from collections.abc import Iterable

    from campus_geo.models.geometry import CanonicalGeometry

logger = logging.getLogger("campus_geo.search.bounds")

_GEOMETRY_TYPES = (Point, LineString, Polygon, MultiPolygon)


def extend(box: BoundingBox | None, geometry: CanonicalGeometry) -> BoundingBox | None:
    """Widen *box* to include every position of *geometry*.

    ``extend(None, g)`` starts from ``g``'s first position.  Returns *box*
    unchanged (possibly ``None``) only if *geometry* has no positions.
    """
    for lng, lat in geometry.positions():
        box = BoundingBox.from_position(lng, lat) if box is None else box.include(lng, lat)
    return box


def aggregate(items: Iterable[object]) -> BoundingBox | None:
    """Fold boxes, geometries, entities or raw coordinate sources into one box.

    Returns:
        The combined box, or ``None`` if *items* is empty or nothing in it
        could be decoded.
    """
    box: BoundingBox | None = None
    skipped = 0
    for item in items:
        if isinstance(item, BoundingBox):
            box = item if box is None else box.union(item)
            continue

        if isinstance(item, _GEOMETRY_TYPES):
            geometry = item
        else:
            source = item.coordinates if isinstance(item, EntityForSearch) else item
            try:
                geometry = decode(source)
            except DecodeError as exc:
                skipped += 1
                logger.debug("Skipping undecodable source | code=%s | reason=%s", exc.code, exc)
                continue
        box = extend(box, geometry)

    if skipped:
        logger.debug("Bounds aggregated | skipped=%d | empty=%s", skipped, box is None)
    return box


def fit_viewport(items: Iterable[object], *, default: BoundingBox) -> BoundingBox:
    """Return the aggregate box of *items*, or *default* when nothing is locatable."""
    box = aggregate(items)
    return box if box is not None else default
