"""Proximity ranking, name search and viewport bounds."""

from campus_geo.search.bounds import aggregate, extend, fit_viewport
from campus_geo.search.distance import haversine_km
from campus_geo.search.ranking import Origin, locate, rank, search

__all__ = [
    "Origin",
    "aggregate",
    "extend",
    "fit_viewport",
    "haversine_km",
    "locate",
    "rank",
    "search",
]
