"""Application services (use cases) for route planning and POI aggregation."""

from map_route_planner.application.geo_distance import haversine_km
from map_route_planner.application.location_search_index import LocationSearchIndex
from map_route_planner.application.map_session import MapSession
from map_route_planner.application.poi_aggregator import PoiAggregator, visible_categories
from map_route_planner.application.route_orchestrator import RouteOrchestrator
from map_route_planner.application.transport_mode_estimator import TransportModeEstimator

__all__ = [
    "LocationSearchIndex",
    "MapSession",
    "PoiAggregator",
    "RouteOrchestrator",
    "TransportModeEstimator",
    "haversine_km",
    "visible_categories",
]
