"""In-memory adapters."""

from map_route_planner.adapters.memory.in_memory_poi_cache import InMemoryPoiCache

__all__ = ["InMemoryPoiCache"]
