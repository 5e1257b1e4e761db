"""Unified search over markers, cached points of interest and a geocoder."""

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from map_route_planner.domain.errors import MapServiceError
from map_route_planner.domain.models import (
    Marker,
    MarkerSearchResult,
    PlaceSearchResult,
    PointOfInterest,
    PoiSearchResult,
    SearchResult,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from map_route_planner.domain.ports import GeocodingService

DEFAULT_RESULT_LIMIT = 5


def _matches(query: str, *fields: str) -> bool:
    return any(query in (field or "").lower() for field in fields)


def marker_result(marker: Marker) -> MarkerSearchResult:
    """Build the search result for a marker."""
    return MarkerSearchResult(
        title=marker.title,
        coordinate=marker.coordinate,
        description=marker.description,
        source_id=marker.id,
    )


def poi_result(poi: PointOfInterest) -> PoiSearchResult:
    """Build the search result for a point of interest."""
    return PoiSearchResult(
        title=poi.title,
        coordinate=poi.coordinate,
        category=poi.category,
        source_id=poi.id,
    )


class LocationSearchIndex:
    """Searches local markers and cached POIs, and optionally an external geocoder.

    Markers and POIs are read through callables so the index always sees the
    current collections without copying them.
    """

    def __init__(
        self,
        markers: Callable[[], Sequence[Marker]],
        pois: Callable[[], Sequence[PointOfInterest]],
        geocoder: "GeocodingService | None" = None,
        result_limit: int = DEFAULT_RESULT_LIMIT,
    ) -> None:
        """Initialize the index.

        Args:
            markers: Returns the current markers.
            pois: Returns the currently cached points of interest.
            geocoder: External place lookup, or None to search locally only.
            result_limit: Maximum number of local and of place results.
        """
        self._markers = markers
        self._pois = pois
        self._geocoder = geocoder
        self.result_limit = result_limit

    def search(self, query: str) -> list[SearchResult]:
        """Case-insensitive substring search over markers, then POIs.

        Markers match on title or description, POIs on title. The combined
        list is capped at ``result_limit``.
        """
        needle = query.strip().lower()
        if not needle:
            return []

        results: list[SearchResult] = [
            marker_result(marker)
            for marker in self._markers()
            if _matches(needle, marker.title, marker.description)
        ]
        results.extend(poi_result(poi) for poi in self._pois() if _matches(needle, poi.title))
        return results[: self.result_limit]

    async def search_places(self, query: str) -> list[PlaceSearchResult]:
        """Look the query up with the external geocoder.

        Geocoder failures are logged and produce no results.
        """
        needle = query.strip()
        if not needle or self._geocoder is None:
            return []

        try:
            places = await self._geocoder.search_places(needle, limit=self.result_limit)
        except MapServiceError as e:
            logger.warning(f"Place search for '{needle}' failed: {e}")
            return []
        return places[: self.result_limit]

    async def search_all(self, query: str) -> list[SearchResult]:
        """Local results followed by place results."""
        results = self.search(query)
        results.extend(await self.search_places(query))
        return results

    def resolve_marker(self, result: SearchResult) -> Marker | None:
        """Find the marker a search result was built from, by id."""
        if not isinstance(result, MarkerSearchResult):
            return None
        for marker in self._markers():
            if marker.id == result.source_id:
                return marker
        return None
