"""Session-scoped state for one map view."""

import logging
from typing import TYPE_CHECKING

from map_route_planner.application.location_search_index import LocationSearchIndex
from map_route_planner.domain.models import (
    BoundingBox,
    Coordinate,
    ErrorDetails,
    Marker,
    MarkerDraft,
    PointOfInterest,
    RoutePlan,
    SearchResult,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from map_route_planner.application.poi_aggregator import PoiAggregator
    from map_route_planner.application.route_orchestrator import RouteOrchestrator
    from map_route_planner.domain.ports import GeocodingService, MarkerRepository

MAX_SELECTED_POINTS = 2


class MapSession:
    """Owns the mutable state of one map view.

    Created when a view starts and closed when it is disposed. The presentation
    layer forwards map events to ``on_viewport_changed`` and
    ``on_point_selected`` and renders the state exposed here; the session
    never touches rendering state itself.
    """

    def __init__(
        self,
        route_orchestrator: "RouteOrchestrator",
        poi_aggregator: "PoiAggregator",
        marker_repository: "MarkerRepository | None" = None,
        geocoder: "GeocodingService | None" = None,
        search_result_limit: int = 5,
    ) -> None:
        """Initialize the session.

        Args:
            route_orchestrator: Computes routes between selected points.
            poi_aggregator: Loads points of interest for the viewport.
            marker_repository: Marker persistence; None for a read-only session.
            geocoder: External place lookup used by ``search_all``.
            search_result_limit: Maximum number of local and of place results.
        """
        self._route_orchestrator = route_orchestrator
        self._poi_aggregator = poi_aggregator
        self._marker_repository = marker_repository
        self.markers: list[Marker] = []
        self.selected_points: list[Coordinate] = []
        self.route_plan: RoutePlan | None = None
        self.selected_route_index = 0
        self.search_index = LocationSearchIndex(
            markers=lambda: self.markers,
            pois=lambda: self._poi_aggregator.pois,
            geocoder=geocoder,
            result_limit=search_result_limit,
        )
        self._closed = False

    @property
    def pois(self) -> list[PointOfInterest]:
        """Points of interest currently loaded for the viewport."""
        return self._poi_aggregator.pois

    @property
    def poi_error(self) -> ErrorDetails | None:
        """Passive signal describing why the last POI fetch failed, if it did."""
        return self._poi_aggregator.last_error

    def _require_repository(self) -> "MarkerRepository":
        if self._marker_repository is None:
            raise RuntimeError("This session has no marker repository")
        return self._marker_repository

    async def load_markers(self) -> list[Marker]:
        """Reload markers from the persistence collaborator."""
        self.markers = await self._require_repository().list_markers()
        logger.debug(f"Loaded {len(self.markers)} marker(s)")
        return self.markers

    async def create_marker(self, draft: MarkerDraft) -> Marker:
        """Validate and save a new marker, then refresh the marker list.

        Raises:
            ValidationFailure: Before any request if the title is empty.
        """
        draft.validate()
        marker = await self._require_repository().create_marker(draft)
        await self.load_markers()
        return marker

    async def update_marker(self, marker_id: str, draft: MarkerDraft) -> None:
        """Validate and update a marker, then refresh the marker list.

        Raises:
            ValidationFailure: Before any request if the title is empty.
            NotFound: If the marker no longer exists.
        """
        draft.validate(require_coordinate=False)
        await self._require_repository().update_marker(marker_id, draft)
        await self.load_markers()

    async def delete_marker(self, marker_id: str) -> None:
        """Delete a marker, then refresh the marker list.

        Raises:
            NotFound: If the marker no longer exists.
        """
        await self._require_repository().delete_marker(marker_id)
        await self.load_markers()

    async def on_point_selected(self, coordinate: Coordinate) -> RoutePlan | None:
        """Toggle a point in the route selection.

        Selecting an already selected point deselects it. Once two points are
        selected the route between them is computed.

        Returns:
            The new route plan when the selection became complete, else None.
        """
        if coordinate in self.selected_points:
            self.selected_points.remove(coordinate)
            self.route_plan = None
            self.selected_route_index = 0
            return None

        if len(self.selected_points) >= MAX_SELECTED_POINTS:
            logger.debug("Route selection already complete, ignoring point")
            return None

        self.selected_points.append(coordinate)
        if len(self.selected_points) < MAX_SELECTED_POINTS:
            return None

        origin, destination = self.selected_points
        self.route_plan = await self._route_orchestrator.compute_route(origin, destination)
        self.selected_route_index = 0
        return self.route_plan

    def select_route(self, index: int) -> None:
        """Highlight one of the computed routes."""
        if self.route_plan is None:
            raise RuntimeError("No route has been computed")
        if not 0 <= index < len(self.route_plan.routes):
            raise IndexError(f"Route index {index} out of range")
        self.selected_route_index = index

    def clear_route(self) -> None:
        """Drop the selection and the computed routes."""
        self.selected_points = []
        self.route_plan = None
        self.selected_route_index = 0

    async def on_viewport_changed(self, bounds: BoundingBox, zoom: float) -> bool:
        """Forward a pan or zoom to the POI aggregator."""
        return await self._poi_aggregator.on_viewport_changed(bounds, zoom)

    def search(self, query: str) -> list[SearchResult]:
        """Search local markers and cached POIs."""
        return self.search_index.search(query)

    async def search_all(self, query: str) -> list[SearchResult]:
        """Search local markers and POIs, then the geocoder."""
        return await self.search_index.search_all(query)

    def resolve_marker(self, result: SearchResult) -> Marker | None:
        """Find the marker behind a search result so it can be highlighted."""
        return self.search_index.resolve_marker(result)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down the session state when the view is disposed."""
        if self._closed:
            return
        self.clear_route()
        self._poi_aggregator.clear()
        self.markers = []
        self._closed = True
        logger.debug("Map session closed")
