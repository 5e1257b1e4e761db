"""OSRM routing adapter."""

from map_route_planner.adapters.osrm_api.osrm_routing_service import OsrmRoutingService

__all__ = ["OsrmRoutingService"]
