"""Adapters layer - external system integrations."""

from map_route_planner.adapters.config import AppConfig
from map_route_planner.adapters.marker_api import HttpMarkerRepository
from map_route_planner.adapters.memory import InMemoryPoiCache
from map_route_planner.adapters.nominatim_api import NominatimGeocodingService
from map_route_planner.adapters.osrm_api import OsrmRoutingService
from map_route_planner.adapters.overpass_api import OverpassPoiService

__all__ = [
    "AppConfig",
    "HttpMarkerRepository",
    "InMemoryPoiCache",
    "NominatimGeocodingService",
    "OsrmRoutingService",
    "OverpassPoiService",
]
