"""GeoJSON import pipeline and per-entity-kind profiles."""

from campus_geo.ingest.pipeline import MISSING_NAME_REASON, run_import
from campus_geo.ingest.profiles import (
    BOUNDARY_PROFILE,
    BUILDING_PROFILE,
    OPEN_SPACE_PROFILE,
    PATH_PROFILE,
    PROFILES,
    ImportProfile,
    NamingMode,
    NamingPolicy,
    get_profile,
)

__all__ = [
    "BOUNDARY_PROFILE",
    "BUILDING_PROFILE",
    "MISSING_NAME_REASON",
    "OPEN_SPACE_PROFILE",
    "PATH_PROFILE",
    "PROFILES",
    "ImportProfile",
    "NamingMode",
    "NamingPolicy",
    "get_profile",
    "run_import",
]
