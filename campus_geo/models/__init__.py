"""Data models.

Defines the data structures shared by the import and search surfaces:
- Geometry: Point, LineString, Polygon, MultiPolygon (canonical geometry)
- Report: per-feature import records and the aggregate ImportReport
- Search: EntityForSearch, SearchResult, BoundingBox
"""

from campus_geo.models.geometry import (
    CanonicalGeometry,
    LineString,
    MultiPolygon,
    Point,
    Polygon,
    Position,
)
from campus_geo.models.report import (
    Duplicate,
    Imported,
    ImportedEntity,
    ImportFailure,
    ImportRecord,
    ImportReport,
    ImportReportPayload,
)
from campus_geo.models.search import BoundingBox, EntityForSearch, SearchResult

__all__ = [
    "BoundingBox",
    "CanonicalGeometry",
    "Duplicate",
    "EntityForSearch",
    "ImportFailure",
    "ImportRecord",
    "ImportReport",
    "ImportReportPayload",
    "Imported",
    "ImportedEntity",
    "LineString",
    "MultiPolygon",
    "Point",
    "Polygon",
    "Position",
    "SearchResult",
]
