"""Shared pytest fixtures for the campus-geo test suite."""

from pathlib import Path

import pytest

from campus_geo.store import InMemoryStore

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"

CAMPUS = "main-campus"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def buildings_geojson(data_dir: Path) -> str:
    """Raw text of a five-feature building upload.

    Features, in order:
    0. "Main Library"   : valid Polygon
    1. "Science Block"  : valid MultiPolygon
    2. "Library Annex"  : same polygon as 0 with keys reordered (duplicate)
    3. (no name)        : valid Polygon
    4. "Sports Hall"    : latitude 95 (invalid coordinate)
    """
    return (data_dir / "campus_buildings.geojson").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def store() -> InMemoryStore:
    """An empty in-memory store with a single ``main-campus`` scope."""
    return InMemoryStore(scopes={CAMPUS})


# ---------------------------------------------------------------------------
# Geometry fixtures
# ---------------------------------------------------------------------------

# Square building footprint (closed ring, counter-clockwise)
SQUARE_RING = [[0.0, 0.0], [0.0, 1.0], [1.0, 1.0], [1.0, 0.0], [0.0, 0.0]]


@pytest.fixture()
def square_polygon() -> dict[str, object]:
    """GeoJSON Polygon with a unit-square exterior ring."""
    return {"type": "Polygon", "coordinates": [SQUARE_RING]}


@pytest.fixture()
def walkway() -> dict[str, object]:
    """GeoJSON LineString for a three-vertex path."""
    return {"type": "LineString", "coordinates": [[0.0, 0.0], [2.0, 0.0], [4.0, 3.0]]}
