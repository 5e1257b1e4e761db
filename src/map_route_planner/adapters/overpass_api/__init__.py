"""Overpass points of interest adapter."""

from map_route_planner.adapters.overpass_api.overpass_poi_service import OverpassPoiService

__all__ = ["OverpassPoiService"]
