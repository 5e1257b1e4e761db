"""Viewport-driven loading and caching of points of interest."""

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from map_route_planner.application.single_flight import SingleFlightGuard
from map_route_planner.domain.errors import MapServiceError, ServiceTimeout
from map_route_planner.domain.models import (
    BoundingBox,
    ErrorDetails,
    PoiCategory,
    PointOfInterest,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from map_route_planner.domain.contracts import PoiCacheProtocol
    from map_route_planner.domain.ports import PoiService

MIN_POI_ZOOM = 11

# (minimum zoom, categories that become visible at that zoom), ascending.
# Each level adds to the previous ones, so higher zoom always shows a superset.
ZOOM_CATEGORY_LEVELS: tuple[tuple[int, frozenset[PoiCategory]], ...] = (
    (MIN_POI_ZOOM, frozenset({PoiCategory.HOSPITAL, PoiCategory.UNIVERSITY})),
    (13, frozenset({PoiCategory.SCHOOL})),
    (15, frozenset({PoiCategory.SUPERMARKET})),
)

EXTENDED_CATEGORIES = frozenset(
    {
        PoiCategory.RESTAURANT,
        PoiCategory.BANK,
        PoiCategory.FUEL,
        PoiCategory.HOTEL,
        PoiCategory.WORSHIP,
    }
)

DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0


def visible_categories(zoom: float, include_extended: bool = False) -> frozenset[PoiCategory]:
    """Get the categories worth loading at a zoom level.

    Args:
        zoom: Current map zoom level.
        include_extended: Also show restaurants, banks, fuel, hotels and places
            of worship at the highest level.

    Returns:
        The visible categories; empty below MIN_POI_ZOOM.
    """
    categories: set[PoiCategory] = set()
    top_level_reached = False
    for min_zoom, added in ZOOM_CATEGORY_LEVELS:
        if zoom >= min_zoom:
            categories |= added
            top_level_reached = min_zoom == ZOOM_CATEGORY_LEVELS[-1][0]

    if include_extended and top_level_reached:
        categories |= EXTENDED_CATEGORIES

    return frozenset(categories)


class PoiAggregator:
    """Loads points of interest for the current viewport into a replace-only cache.

    At most one fetch is outstanding at a time. Failed fetches leave the cache
    untouched and are only reported through ``last_error`` and the log.
    """

    def __init__(
        self,
        poi_service: "PoiService",
        cache: "PoiCacheProtocol",
        fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        include_extended_categories: bool = False,
    ) -> None:
        """Initialize the aggregator.

        Args:
            poi_service: Spatial-query service to load places from.
            cache: Cache holding the currently loaded places.
            fetch_timeout_seconds: Hard client-side deadline per fetch.
            include_extended_categories: Load the extended categories at high zoom.
        """
        self._poi_service = poi_service
        self._cache = cache
        self.fetch_timeout_seconds = fetch_timeout_seconds
        self.include_extended_categories = include_extended_categories
        self._guard = SingleFlightGuard("poi fetch")
        # Bumped whenever the cache is cleared so a fetch started earlier cannot refill it
        self._generation = 0
        self.last_bounds: BoundingBox | None = None
        self.last_zoom: float | None = None
        self.last_error: ErrorDetails | None = None

    @property
    def pois(self) -> list[PointOfInterest]:
        """The currently cached points of interest."""
        return self._cache.get_all()

    @property
    def in_flight(self) -> bool:
        return self._guard.in_flight

    async def on_viewport_changed(self, bounds: BoundingBox, zoom: float) -> bool:
        """Handle a pan or zoom of the map.

        Returns:
            True if the cache was replaced with freshly loaded places.
        """
        self.last_bounds = bounds
        self.last_zoom = zoom
        categories = visible_categories(zoom, self.include_extended_categories)
        return await self.load_pois(bounds, categories)

    async def load_pois(self, bounds: BoundingBox, categories: Iterable[PoiCategory]) -> bool:
        """Load places of the given categories inside the bounds.

        An empty category set clears the cache without issuing a request. A
        call made while another fetch is pending is a silent no-op.

        Returns:
            True if the cache was replaced, False otherwise.
        """
        wanted = frozenset(categories)
        if not wanted:
            self.clear()
            return False

        with self._guard.claim() as acquired:
            if not acquired:
                return False
            return await self._fetch_into_cache(bounds, wanted)

    async def _fetch_into_cache(
        self, bounds: BoundingBox, categories: frozenset[PoiCategory]
    ) -> bool:
        generation = self._generation
        try:
            async with asyncio.timeout(self.fetch_timeout_seconds):
                pois = await self._poi_service.fetch_pois(bounds, categories)
        except TimeoutError:
            error = ServiceTimeout(
                f"POI fetch exceeded {self.fetch_timeout_seconds:g}s and was cancelled"
            )
            self._record_failure(error)
            return False
        except MapServiceError as e:
            self._record_failure(e)
            return False

        if generation != self._generation:
            logger.debug("Discarding POI result loaded before the cache was cleared")
            return False

        inside = [poi for poi in pois if bounds.contains(poi.coordinate)]
        if len(inside) < len(pois):
            logger.debug(f"Dropped {len(pois) - len(inside)} POI(s) outside the requested bounds")
        self._cache.replace(inside)
        self.last_error = None
        logger.info(f"Loaded {len(inside)} POI(s) for {sorted(c.value for c in categories)}")
        return True

    def _record_failure(self, error: Exception) -> None:
        self.last_error = ErrorDetails.from_error(error)
        logger.warning(f"POI fetch failed, keeping cached POIs: {self.last_error.reason}")

    def filter_cached(self, categories: Iterable[PoiCategory] | None = None) -> list[PointOfInterest]:
        """Filter the cache by user-selected categories without fetching.

        Args:
            categories: Categories to keep; None keeps everything.
        """
        pois = self._cache.get_all()
        if categories is None:
            return list(pois)
        selected = frozenset(categories)
        return [poi for poi in pois if poi.category in selected]

    def clear(self) -> None:
        """Drop all cached places."""
        self._generation += 1
        self._cache.clear()
        self.last_error = None
