"""Marker persistence adapter."""

from map_route_planner.adapters.marker_api.http_marker_repository import HttpMarkerRepository

__all__ = ["HttpMarkerRepository"]
