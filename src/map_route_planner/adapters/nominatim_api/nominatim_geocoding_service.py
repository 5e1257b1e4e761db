"""Nominatim geocoding adapter.

API Documentation: https://nominatim.org/release-docs/latest/api/Search/
Usage policy: at most one request per second and an identifying User-Agent.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from map_route_planner.adapters.api_rate_limiter import ApiRateLimiter
from map_route_planner.adapters.api_request_logger import log_api_request
from map_route_planner.adapters.http_errors import raise_for_status, read_json
from map_route_planner.domain.errors import NetworkFailure, ServiceTimeout
from map_route_planner.domain.models import Coordinate, PlaceSearchResult
from map_route_planner.domain.ports.geocoding_service import GeocodingService

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
NOMINATIM_MIN_DELAY_SECONDS = 1.0


class NominatimGeocodingService(GeocodingService):
    """Adapter for the Nominatim /search endpoint."""

    def __init__(
        self,
        session: "ClientSession",
        base_url: str = DEFAULT_NOMINATIM_BASE_URL,
        user_agent: str = "map-route-planner/0.1",
        min_delay_seconds: float = NOMINATIM_MIN_DELAY_SECONDS,
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize the adapter.

        Args:
            session: aiohttp session used for all requests.
            base_url: Nominatim base URL.
            user_agent: Identifying User-Agent header value.
            min_delay_seconds: Minimum delay between requests.
            timeout_seconds: Timeout for one request.
        """
        self._session = session
        self._search_url = f"{base_url.rstrip('/')}/search"
        self._headers = {"Accept": "application/json", "User-Agent": user_agent}
        self._min_delay_seconds = min_delay_seconds
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._rate_limiter: ApiRateLimiter | None = None

    async def _get_rate_limiter(self) -> ApiRateLimiter:
        if self._rate_limiter is None:
            self._rate_limiter = await ApiRateLimiter.get_instance(
                "nominatim_api", self._min_delay_seconds
            )
        return self._rate_limiter

    async def search_places(self, query: str, limit: int = 5) -> list[PlaceSearchResult]:
        """Search places by free text.

        Raises:
            NetworkFailure: Unreachable server, non-2xx status or malformed body.
            RateLimited: The server answered 429.
            ServiceTimeout: The request timed out.
        """
        params: dict[str, str | int] = {"format": "json", "q": query, "limit": limit}
        log_api_request("GET", self._search_url, params=params, headers=self._headers)

        rate_limiter = await self._get_rate_limiter()
        await rate_limiter.acquire()

        try:
            async with self._session.get(
                self._search_url, params=params, headers=self._headers, timeout=self._timeout
            ) as response:
                await raise_for_status(response, "Nominatim")
                data = await read_json(response, "Nominatim")
        except asyncio.TimeoutError as e:
            raise ServiceTimeout("Nominatim request timed out") from e
        except aiohttp.ClientError as e:
            raise NetworkFailure(f"Nominatim request failed: {e}") from e

        if not isinstance(data, list):
            raise NetworkFailure("Nominatim returned a non-list response")

        return self._parse_places(data)[:limit]

    @staticmethod
    def _parse_places(places: list[Any]) -> list[PlaceSearchResult]:
        """Parse Nominatim items; lat/lon arrive as strings."""
        results = []
        for place in places:
            if not isinstance(place, dict):
                continue
            try:
                coordinate = Coordinate(
                    latitude=float(place["lat"]), longitude=float(place["lon"])
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping Nominatim place without valid position: {e}")
                continue

            place_id = place.get("place_id")
            results.append(
                PlaceSearchResult(
                    title=place.get("display_name", ""),
                    coordinate=coordinate,
                    source_id=str(place_id) if place_id is not None else None,
                )
            )
        return results
