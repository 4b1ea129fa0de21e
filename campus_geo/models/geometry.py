"""Canonical geometry values.

A ``CanonicalGeometry`` is one of four frozen dataclasses mirroring the
GeoJSON geometry types the campus map understands.  Every position is a
``(longitude, latitude)`` tuple of finite floats inside WGS 84 bounds;
the codec (``campus_geo.geometry.decode``) is the only place that builds
them from untrusted input and enforces that invariant.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from campus_geo.core.constants import LINE_STRING, MULTI_POLYGON, POINT, POLYGON

Position = tuple[float, float]
Ring = tuple[Position, ...]


@dataclass(frozen=True, slots=True)
class Point:
    """A single ``(lon, lat)`` position."""

    lng: float
    lat: float

    geom_type = POINT

    @property
    def position(self) -> Position:
        return (self.lng, self.lat)

    def positions(self) -> Iterator[Position]:
        yield self.position

    def to_geojson(self) -> dict[str, object]:
        return {"type": POINT, "coordinates": [self.lng, self.lat]}


@dataclass(frozen=True, slots=True)
class LineString:
    """An ordered sequence of positions (a campus path)."""

    points: tuple[Position, ...] = field(default_factory=tuple)

    geom_type = LINE_STRING

    def positions(self) -> Iterator[Position]:
        yield from self.points

    def to_geojson(self) -> dict[str, object]:
        return {"type": LINE_STRING, "coordinates": [list(p) for p in self.points]}


@dataclass(frozen=True, slots=True)
class Polygon:
    """A polygon as a tuple of rings.

    Attributes:
        rings: Exterior ring first, then interior rings (holes).  Rings are
            kept exactly as supplied: no auto-closing, no winding fix-up.
    """

    rings: tuple[Ring, ...] = field(default_factory=tuple)

    geom_type = POLYGON

    @property
    def exterior(self) -> Ring:
        """The outer ring, or an empty tuple for an empty polygon."""
        return self.rings[0] if self.rings else ()

    @property
    def interiors(self) -> tuple[Ring, ...]:
        return self.rings[1:]

    def positions(self) -> Iterator[Position]:
        for ring in self.rings:
            yield from ring

    def to_geojson(self) -> dict[str, object]:
        return {
            "type": POLYGON,
            "coordinates": [[list(p) for p in ring] for ring in self.rings],
        }


@dataclass(frozen=True, slots=True)
class MultiPolygon:
    """A collection of polygons sharing one identity (e.g. a split building)."""

    polygons: tuple[Polygon, ...] = field(default_factory=tuple)

    geom_type = MULTI_POLYGON

    def positions(self) -> Iterator[Position]:
        for polygon in self.polygons:
            yield from polygon.positions()

    def to_geojson(self) -> dict[str, object]:
        return {
            "type": MULTI_POLYGON,
            "coordinates": [
                [[list(p) for p in ring] for ring in polygon.rings] for polygon in self.polygons
            ],
        }


CanonicalGeometry = Point | LineString | Polygon | MultiPolygon
"""Tagged union of every geometry the library handles."""
