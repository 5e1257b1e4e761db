"""Contracts (protocols) implemented by adapters and consumed by the application."""

from map_route_planner.domain.contracts.poi_cache import PoiCacheProtocol

__all__ = ["PoiCacheProtocol"]
