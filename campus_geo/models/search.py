"""Search and viewport models.

- ``EntityForSearch``: the minimal view of a stored entity that ranking
  and bounds need.  ``coordinates`` is deliberately untyped: stored rows
  carry GeoJSON strings, GeoJSON objects or flat lat/lng fields.
- ``SearchResult``: one ranked result.
- ``BoundingBox``: a ``(min_lng, min_lat, max_lng, max_lat)`` extent.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

from campus_geo.core.constants import LATITUDE_KEYS, LONGITUDE_KEYS


@dataclass(frozen=True, slots=True)
class EntityForSearch:
    """A stored entity as seen by the search helpers.

    Attributes:
        id: Store identifier.
        name: Display name.
        kind: Entity kind (``"building"``, ``"openSpace"``, ``"location"``...).
        coordinates: Raw coordinate source, decoded lazily.
        category: Optional category label shown next to the result.
    """

    id: str
    name: str
    kind: str
    coordinates: object = None
    category: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any], *, kind: str) -> EntityForSearch:
        """Build an entity from a store row.

        The coordinate source is the row's ``coordinates`` member, else its
        ``geometry`` member, else the flat lat/lng fields of the row itself.
        ``category`` may be a plain string or an object with a ``name``.
        """
        source: object = record.get("coordinates")
        if source is None:
            source = record.get("geometry")
        if source is None and any(k in record for k in (*LONGITUDE_KEYS, *LATITUDE_KEYS)):
            source = {k: record[k] for k in (*LONGITUDE_KEYS, *LATITUDE_KEYS) if k in record}

        category = record.get("category")
        if isinstance(category, Mapping):
            category = category.get("name")

        return cls(
            id=str(record.get("id", "")),
            name=str(record.get("name") or ""),
            kind=kind,
            coordinates=source,
            category=str(category) if category is not None else None,
        )


@dataclass(frozen=True, slots=True)
class SearchResult:
    """One ranked search result.

    ``distance_km`` is set only when the query had an origin and the
    entity's geometry resolved to a centroid.
    """

    id: str
    name: str
    kind: str
    category: str | None = None
    centroid: tuple[float, float] | None = None
    distance_km: float | None = None

    @property
    def is_located(self) -> bool:
        return self.centroid is not None

    def to_dict(self) -> dict[str, object]:
        """Serialise for the map UI, omitting absent optional keys."""
        data: dict[str, object] = {"id": self.id, "name": self.name, "kind": self.kind}
        if self.category is not None:
            data["category"] = self.category
        if self.centroid is not None:
            data["centroid"] = list(self.centroid)
        if self.distance_km is not None:
            data["distanceKm"] = self.distance_km
        return data


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """An axis-aligned lon/lat extent."""

    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float

    @classmethod
    def from_position(cls, lng: float, lat: float) -> BoundingBox:
        """A zero-area box around a single position."""
        return cls(min_lng=lng, min_lat=lat, max_lng=lng, max_lat=lat)

    def include(self, lng: float, lat: float) -> BoundingBox:
        """Return a box widened to contain ``(lng, lat)``."""
        if (
            self.min_lng <= lng <= self.max_lng
            and self.min_lat <= lat <= self.max_lat
        ):
            return self
        return replace(
            self,
            min_lng=min(self.min_lng, lng),
            min_lat=min(self.min_lat, lat),
            max_lng=max(self.max_lng, lng),
            max_lat=max(self.max_lat, lat),
        )

    def union(self, other: BoundingBox) -> BoundingBox:
        return self.include(other.min_lng, other.min_lat).include(other.max_lng, other.max_lat)

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_lng + self.max_lng) / 2, (self.min_lat + self.max_lat) / 2)

    def to_lnglat_bounds(self) -> list[list[float]]:
        """Render as ``[[min_lng, min_lat], [max_lng, max_lat]]`` for map fitting."""
        return [[self.min_lng, self.min_lat], [self.max_lng, self.max_lat]]

    def to_dict(self) -> dict[str, float]:
        return {
            "minLng": self.min_lng,
            "minLat": self.min_lat,
            "maxLng": self.max_lng,
            "maxLat": self.max_lat,
        }
