"""Point of interest service port."""

from typing import Protocol

from map_route_planner.domain.models.coordinate import BoundingBox
from map_route_planner.domain.models.point_of_interest import PoiCategory, PointOfInterest


class PoiService(Protocol):
    """Port for querying categorized places inside a bounding box."""

    async def fetch_pois(
        self, bounds: BoundingBox, categories: frozenset[PoiCategory]
    ) -> list[PointOfInterest]:
        """Get all places of the given categories inside the box."""
        ...
