"""Nearest-first ranking of campus entities for map search.

Every entity is kept in the output.  Entities whose coordinates cannot be
decoded are shown after located ones (``centroid`` and ``distance_km``
both ``None``) so the search box still lists them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from campus_geo.core.config import GeoConfig
from campus_geo.core.exceptions import DecodeError
from campus_geo.geometry import centroid, decode
from campus_geo.models.search import SearchResult
from campus_geo.search.distance import haversine_km

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from campus_geo.models.search import EntityForSearch

logger = logging.getLogger("campus_geo.search")

Origin = tuple[float, float]
"""User location as ``(lng, lat)``."""


def locate(entity: EntityForSearch, *, strategy: str = "vertex_mean") -> tuple[float, float] | None:
    """Return the entity's representative ``(lng, lat)``, or ``None`` if it has none."""
    try:
        geometry = decode(entity.coordinates)
    except DecodeError as exc:
        logger.debug(
            "Entity has no usable coordinates | id=%s | name=%s | code=%s",
            entity.id,
            entity.name,
            exc.code,
        )
        return None
    return centroid(geometry, strategy=strategy)


def rank(
    origin: Origin | None,
    entities: Iterable[EntityForSearch],
    *,
    config: GeoConfig | None = None,
) -> list[SearchResult]:
    """Rank entities nearest-first from *origin*.

    Located entities come first, ascending by distance; unlocated entities
    follow.  Input order is kept within each group and for equal distances.
    With no origin, no distances are computed and input order is kept.

    Args:
        origin: User location as ``(lng, lat)``, or ``None``.
        entities: Entities to rank; never mutated.
        config: Library configuration (defaults to ``GeoConfig()``).
    """
    config = config or GeoConfig()

    results: list[SearchResult] = []
    for entity in entities:
        point = locate(entity, strategy=config.centroid_strategy)
        distance = None
        if origin is not None and point is not None:
            distance = haversine_km(
                origin[1],
                origin[0],
                point[1],
                point[0],
                radius_km=config.earth_radius_km,
            )
        results.append(
            SearchResult(
                id=entity.id,
                name=entity.name,
                kind=entity.kind,
                category=entity.category,
                centroid=point,
                distance_km=distance,
            )
        )

    # sorted() is stable, so ties and unlocated entities keep input order.
    return sorted(
        results,
        key=lambda r: (r.distance_km is None, r.distance_km if r.distance_km is not None else 0.0),
    )


def search(
    query: str,
    entities: Sequence[EntityForSearch],
    *,
    origin: Origin | None = None,
    limit: int | None = None,
    config: GeoConfig | None = None,
) -> list[SearchResult]:
    """Filter entities by name and rank the matches.

    Matching is a case-insensitive substring test on ``name``.  A blank
    query returns no results.

    Args:
        query: Text typed into the search box.
        entities: Candidate entities (buildings, open spaces, locations...).
        origin: User location as ``(lng, lat)``, if known.
        limit: Maximum results (defaults to ``config.search_result_limit``).
        config: Library configuration (defaults to ``GeoConfig()``).
    """
    config = config or GeoConfig()
    needle = query.strip().lower()
    if not needle:
        return []

    matches = [e for e in entities if needle in (e.name or "").lower()]
    ranked = rank(origin, matches, config=config)
    return ranked[: limit if limit is not None else config.search_result_limit]
