"""Routing service port."""

from typing import Protocol

from map_route_planner.domain.models.coordinate import Coordinate
from map_route_planner.domain.models.route import Route


class RoutingService(Protocol):
    """Port for requesting a drivable route through a list of waypoints."""

    async def fetch_route(self, waypoints: list[Coordinate]) -> Route:
        """Get the first route through the waypoints, in order.

        Raises:
            MapServiceError: When the service is unreachable, times out or
                produces no route.
        """
        ...
