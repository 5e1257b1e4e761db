"""OSRM routing service adapter."""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from map_route_planner.adapters.api_request_logger import log_api_request
from map_route_planner.adapters.http_errors import raise_for_status, read_json
from map_route_planner.adapters.osrm_api.constants import (
    DEFAULT_HEADERS,
    DEFAULT_OSRM_BASE_URL,
    OK_CODE,
    ROUTE_PARAMS,
)
from map_route_planner.domain.errors import NetworkFailure, NoRouteFound, ServiceTimeout
from map_route_planner.domain.models import Coordinate, Route
from map_route_planner.domain.ports.routing_service import RoutingService

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


class OsrmRoutingService(RoutingService):
    """Adapter for the OSRM /route endpoint.

    Converts waypoints to OSRM's lon,lat order and the response back to a
    Route in kilometres and minutes.
    """

    def __init__(
        self,
        session: "ClientSession",
        base_url: str = DEFAULT_OSRM_BASE_URL,
        profile: str = "driving",
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize the adapter.

        Args:
            session: aiohttp session used for all requests.
            base_url: OSRM server base URL.
            profile: Routing profile (driving, walking, cycling).
            timeout_seconds: Timeout for one request.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._profile = profile
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def build_url(self, waypoints: list[Coordinate]) -> str:
        """Build the route URL for the waypoints, e.g. .../route/v1/driving/lon,lat;lon,lat."""
        path = ";".join(waypoint.as_lon_lat() for waypoint in waypoints)
        return f"{self._base_url}/route/v1/{self._profile}/{path}"

    async def fetch_route(self, waypoints: list[Coordinate]) -> Route:
        """Get the first route OSRM returns through the waypoints.

        Raises:
            NetworkFailure: Unreachable server, non-2xx status or malformed body.
            NoRouteFound: Non-"Ok" code or no routes in the response.
            ServiceTimeout: The request exceeded its timeout.
            RateLimited: The server answered 429.
            UpstreamTimeout: The server answered 504.
        """
        if len(waypoints) < 2:
            raise ValueError("At least two waypoints are required to compute a route.")

        url = self.build_url(waypoints)
        log_api_request("GET", url, params=ROUTE_PARAMS, headers=DEFAULT_HEADERS)

        try:
            async with self._session.get(
                url, params=ROUTE_PARAMS, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                await raise_for_status(response, "OSRM")
                data = await read_json(response, "OSRM")
        except asyncio.TimeoutError as e:
            raise ServiceTimeout(f"OSRM request timed out: {url}") from e
        except aiohttp.ClientError as e:
            raise NetworkFailure(f"OSRM request failed: {e}") from e

        return self._parse_route(data)

    @staticmethod
    def _parse_route(data: Any) -> Route:
        """Parse the first route of an OSRM response."""
        if not isinstance(data, dict):
            raise NetworkFailure("OSRM returned a non-object response")

        if data.get("code") != OK_CODE:
            raise NoRouteFound(f"OSRM error: {data.get('message', data.get('code', 'Unknown error'))}")

        routes = data.get("routes") or []
        if not routes:
            raise NoRouteFound("OSRM returned no routes")

        route = routes[0]
        try:
            coordinates = tuple(
                Coordinate(latitude=float(lat), longitude=float(lon))
                for lon, lat, *_ in route["geometry"]["coordinates"]
            )
            return Route(
                coordinates=coordinates,
                distance_km=float(route["distance"]) / 1000,
                duration_min=float(route["duration"]) / 60,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise NetworkFailure(f"Malformed OSRM route: {e}") from e
