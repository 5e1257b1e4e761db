"""Domain models for the map route planner."""

from map_route_planner.domain.models.coordinate import BoundingBox, Coordinate
from map_route_planner.domain.models.error_details import ErrorDetails
from map_route_planner.domain.models.marker import Marker, MarkerDraft
from map_route_planner.domain.models.point_of_interest import PoiCategory, PointOfInterest
from map_route_planner.domain.models.route import Route, RoutePlan
from map_route_planner.domain.models.search_result import (
    MarkerSearchResult,
    PlaceSearchResult,
    PoiSearchResult,
    SearchResult,
)
from map_route_planner.domain.models.transport_mode import TransportMode

__all__ = [
    "BoundingBox",
    "Coordinate",
    "ErrorDetails",
    "Marker",
    "MarkerDraft",
    "MarkerSearchResult",
    "PlaceSearchResult",
    "PoiCategory",
    "PoiSearchResult",
    "PointOfInterest",
    "Route",
    "RoutePlan",
    "SearchResult",
    "TransportMode",
]
