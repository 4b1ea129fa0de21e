"""Campus geospatial ingestion and proximity search.

Bulk-imports GeoJSON feature collections into geometry-bearing campus
entities (buildings, paths, open spaces, boundaries) with content-based
duplicate detection and slug allocation, and ranks stored entities by
great-circle distance for map search and viewport fitting.
"""

__version__ = "0.1.0"
