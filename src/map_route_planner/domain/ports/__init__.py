"""Ports (interfaces) for the ports-and-adapters architecture."""

from map_route_planner.domain.ports.geocoding_service import GeocodingService
from map_route_planner.domain.ports.marker_repository import MarkerRepository
from map_route_planner.domain.ports.poi_service import PoiService
from map_route_planner.domain.ports.routing_service import RoutingService

__all__ = [
    "GeocodingService",
    "MarkerRepository",
    "PoiService",
    "RoutingService",
]
