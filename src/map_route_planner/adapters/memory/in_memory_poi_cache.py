"""In-memory point of interest cache."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from map_route_planner.domain.contracts.poi_cache import PoiCacheProtocol

if TYPE_CHECKING:
    from map_route_planner.domain.models.point_of_interest import PointOfInterest

logger = logging.getLogger(__name__)


class InMemoryPoiCache(PoiCacheProtocol):
    """Holds the points of interest of the latest successful fetch."""

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._pois: list[PointOfInterest] = []

    def get_all(self) -> list[PointOfInterest]:
        """Get a copy of the cached points of interest."""
        return list(self._pois)

    def replace(self, pois: list[PointOfInterest]) -> None:
        """Swap in a new result set; nothing from the previous set is kept.

        Args:
            pois: The points of interest to cache.
        """
        self._pois = list(pois)
        logger.debug(f"POI cache now holds {len(self._pois)} item(s)")

    def clear(self) -> None:
        """Drop all cached points of interest."""
        self._pois = []

    def __len__(self) -> int:
        return len(self._pois)
