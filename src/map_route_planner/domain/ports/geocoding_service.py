"""Geocoding service port."""

from typing import Protocol

from map_route_planner.domain.models.search_result import PlaceSearchResult


class GeocodingService(Protocol):
    """Port for free-text place lookup."""

    async def search_places(self, query: str, limit: int = 5) -> list[PlaceSearchResult]:
        """Find places matching a free-text query."""
        ...
