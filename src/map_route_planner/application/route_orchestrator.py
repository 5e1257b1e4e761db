"""Route computation with alternatives and a straight-line fallback."""

import asyncio
import logging
from typing import TYPE_CHECKING

from map_route_planner.application.geo_distance import haversine_km
from map_route_planner.application.transport_mode_estimator import TransportModeEstimator
from map_route_planner.domain.errors import MapServiceError
from map_route_planner.domain.models import Coordinate, Route, RoutePlan, TransportMode

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from map_route_planner.domain.ports import RoutingService

# Alternatives are forced through the midpoint shifted north/south by this many degrees.
# Fixed heuristic: it does not adapt to route length or latitude.
ALTERNATIVE_WAYPOINT_OFFSET_DEG = 0.05
# An alternative must take more than 5% longer than the best route to be kept.
ALTERNATIVE_ADMISSION_RATIO = 1.05
# Below this distance only the best route is returned.
SHORT_ROUTE_THRESHOLD_KM = 2.0

BEST_ROUTE_NAME = "Best route"
FALLBACK_ROUTE_NAME = "Straight line"


class RouteOrchestrator:
    """Finds the best route between two points plus admissible alternatives."""

    def __init__(
        self,
        routing_service: "RoutingService",
        mode_estimator: TransportModeEstimator | None = None,
    ) -> None:
        """Initialize with a routing service and a transport mode estimator."""
        self._routing_service = routing_service
        self._mode_estimator = mode_estimator or TransportModeEstimator()

    async def compute_route(self, origin: Coordinate, destination: Coordinate) -> RoutePlan:
        """Compute the route plan between two points.

        The direct route is resolved first. If it fails the plan degrades to a
        single straight-line route and no alternatives are requested. Routing
        failures never propagate to the caller.
        """
        try:
            direct = await self._routing_service.fetch_route([origin, destination])
        except MapServiceError as e:
            logger.warning(f"Direct route request failed, using straight line: {e}")
            return self._straight_line_plan(origin, destination)

        best = direct.as_best(BEST_ROUTE_NAME)
        routes = [best]

        if best.distance_km < SHORT_ROUTE_THRESHOLD_KM:
            logger.debug(f"Best route is {best.distance_km:.2f} km, skipping alternatives")
        else:
            routes.extend(await self._admissible_alternatives(origin, destination, best))

        logger.info(
            f"Computed {len(routes)} route(s): "
            + ", ".join(f"{r.name} {r.duration_min:.1f} min {r.distance_km:.1f} km" for r in routes)
        )
        return RoutePlan(
            origin=origin,
            destination=destination,
            routes=tuple(routes),
            modes=tuple(self._estimate_modes(best.distance_km)),
        )

    async def _admissible_alternatives(
        self, origin: Coordinate, destination: Coordinate, best: Route
    ) -> list[Route]:
        """Request both detour alternatives concurrently and keep the admissible ones."""
        midpoint = origin.midpoint(destination)
        waypoints = [
            midpoint.offset(ALTERNATIVE_WAYPOINT_OFFSET_DEG),
            midpoint.offset(-ALTERNATIVE_WAYPOINT_OFFSET_DEG),
        ]

        results = await asyncio.gather(
            *(
                self._routing_service.fetch_route([origin, waypoint, destination])
                for waypoint in waypoints
            ),
            return_exceptions=True,
        )

        admitted: list[Route] = []
        for slot, result in enumerate(results, start=1):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.info(f"Alternative route {slot} failed: {result}")
                continue

            if not is_admissible(result, best):
                logger.debug(
                    f"Alternative route {slot} rejected: {result.duration_min:.1f} min "
                    f"is within {ALTERNATIVE_ADMISSION_RATIO:.2f}x of {best.duration_min:.1f} min"
                )
                continue

            admitted.append(result.as_alternative(f"Alternative route {slot}"))

        return admitted

    def _straight_line_plan(self, origin: Coordinate, destination: Coordinate) -> RoutePlan:
        """Build the fallback plan: one two-point route with zero duration."""
        distance_km = haversine_km(origin, destination)
        route = Route(
            coordinates=(origin, destination),
            distance_km=distance_km,
            duration_min=0.0,
            is_best=True,
            name=FALLBACK_ROUTE_NAME,
        )
        return RoutePlan(
            origin=origin,
            destination=destination,
            routes=(route,),
            modes=tuple(self._estimate_modes(distance_km)),
            is_fallback=True,
        )

    def _estimate_modes(self, distance_km: float) -> list[TransportMode]:
        # The estimator requires a positive distance
        if distance_km <= 0:
            return []
        return self._mode_estimator.estimate_modes(distance_km)


def is_admissible(alternative: Route, best: Route) -> bool:
    """Check whether an alternative is different enough from the best route."""
    return alternative.duration_min > best.duration_min * ALTERNATIVE_ADMISSION_RATIO
