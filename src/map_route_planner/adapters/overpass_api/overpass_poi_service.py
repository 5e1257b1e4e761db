"""Overpass points of interest adapter."""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from map_route_planner.adapters.api_rate_limiter import ApiRateLimiter
from map_route_planner.adapters.api_request_logger import log_api_request
from map_route_planner.adapters.http_errors import raise_for_status, read_json
from map_route_planner.adapters.overpass_api.constants import (
    CATEGORY_TAGS,
    DEFAULT_HEADERS,
    DEFAULT_OVERPASS_URL,
    UNNAMED_TITLE,
)
from map_route_planner.adapters.overpass_api.query_builder import build_query
from map_route_planner.domain.errors import NetworkFailure, ServiceTimeout
from map_route_planner.domain.models import (
    BoundingBox,
    Coordinate,
    PoiCategory,
    PointOfInterest,
)
from map_route_planner.domain.ports.poi_service import PoiService

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession


def resolve_category(tags: dict[str, Any]) -> PoiCategory:
    """Match an element's tags against the category table, else ``other``."""
    for category, (key, value) in CATEGORY_TAGS.items():
        if tags.get(key) == value:
            return category
    return PoiCategory.OTHER


class OverpassPoiService(PoiService):
    """Adapter for the Overpass API interpreter endpoint."""

    def __init__(
        self,
        session: "ClientSession",
        url: str = DEFAULT_OVERPASS_URL,
        query_timeout_seconds: int = 25,
        min_delay_seconds: float = 1.0,
    ) -> None:
        """Initialize the adapter.

        Args:
            session: aiohttp session used for all requests.
            url: Overpass interpreter endpoint.
            query_timeout_seconds: Server-side timeout embedded in each query.
            min_delay_seconds: Minimum delay between requests to this endpoint.
        """
        self._session = session
        self._url = url
        self._query_timeout_seconds = query_timeout_seconds
        self._min_delay_seconds = min_delay_seconds
        self._rate_limiter: ApiRateLimiter | None = None

    async def _get_rate_limiter(self) -> ApiRateLimiter:
        if self._rate_limiter is None:
            self._rate_limiter = await ApiRateLimiter.get_instance(
                "overpass_api", self._min_delay_seconds
            )
        return self._rate_limiter

    async def fetch_pois(
        self, bounds: BoundingBox, categories: frozenset[PoiCategory]
    ) -> list[PointOfInterest]:
        """Query the places of the given categories inside the bounds.

        Raises:
            NetworkFailure: Unreachable server, non-2xx status or malformed body.
            RateLimited: The server answered 429.
            UpstreamTimeout: The server answered 504.
            ServiceTimeout: The request timed out at the HTTP layer.
        """
        if not categories:
            return []

        query = build_query(bounds, categories, self._query_timeout_seconds)
        log_api_request("POST", self._url, headers=DEFAULT_HEADERS, payload=query)

        rate_limiter = await self._get_rate_limiter()
        await rate_limiter.acquire()

        try:
            async with self._session.post(
                self._url, data={"data": query}, headers=DEFAULT_HEADERS
            ) as response:
                await raise_for_status(response, "Overpass")
                data = await read_json(response, "Overpass")
        except asyncio.TimeoutError as e:
            raise ServiceTimeout("Overpass request timed out") from e
        except aiohttp.ClientError as e:
            raise NetworkFailure(f"Overpass request failed: {e}") from e

        return self._parse_elements(data)

    @staticmethod
    def _parse_elements(data: Any) -> list[PointOfInterest]:
        """Parse Overpass elements, skipping those without a position."""
        if not isinstance(data, dict):
            raise NetworkFailure("Overpass returned a non-object response")

        pois = []
        for element in data.get("elements", []):
            if not isinstance(element, dict):
                continue
            lat = element.get("lat")
            lon = element.get("lon")
            if lat is None or lon is None:
                continue

            tags = element.get("tags") or {}
            try:
                coordinate = Coordinate(latitude=float(lat), longitude=float(lon))
            except (TypeError, ValueError) as e:
                logger.warning(f"Skipping Overpass element {element.get('id')}: {e}")
                continue

            pois.append(
                PointOfInterest(
                    id=str(element.get("id", "")),
                    coordinate=coordinate,
                    title=tags.get("name") or UNNAMED_TITLE,
                    category=resolve_category(tags),
                )
            )

        logger.debug(f"Parsed {len(pois)} POI(s) from Overpass response")
        return pois
