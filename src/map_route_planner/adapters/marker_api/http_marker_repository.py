"""HTTP adapter for the marker persistence collaborator."""

import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, cast

import aiohttp

from map_route_planner.adapters.api_request_logger import log_api_request
from map_route_planner.adapters.http_errors import raise_for_status, read_json
from map_route_planner.domain.errors import NetworkFailure, NotFound, ServiceTimeout
from map_route_planner.domain.models import Coordinate, Marker, MarkerDraft
from map_route_planner.domain.ports.marker_repository import MarkerRepository

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_MARKER_API_URL = "http://localhost:3000/api/markers"


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Ignoring unparseable marker timestamp: {value}")
        return None


def parse_marker(data: dict[str, Any]) -> Marker:
    """Parse a marker document ({_id, lat, lng, title, description, createdAt})."""
    marker_id = data.get("_id") or data.get("id")
    if not marker_id:
        raise NetworkFailure("Marker document without id")
    try:
        coordinate = Coordinate(latitude=float(data["lat"]), longitude=float(data["lng"]))
    except (KeyError, TypeError, ValueError) as e:
        raise NetworkFailure(f"Marker {marker_id} has no valid position: {e}") from e

    return Marker(
        id=str(marker_id),
        coordinate=coordinate,
        title=data.get("title") or "",
        description=data.get("description") or "",
        created_at=_parse_timestamp(data.get("createdAt")),
    )


class HttpMarkerRepository(MarkerRepository):
    """Marker CRUD over the JSON marker resource.

    Drafts are validated before any request is sent.
    """

    def __init__(
        self,
        session: "ClientSession",
        url: str = DEFAULT_MARKER_API_URL,
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize with an aiohttp session and the marker resource URL."""
        self._session = session
        self._url = url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def _request(self, method: str, url: str, payload: dict[str, Any] | None = None) -> Any:
        log_api_request(method, url, payload=payload)
        try:
            async with self._session.request(
                method, url, json=payload, timeout=self._timeout
            ) as response:
                await raise_for_status(response, "Marker API")
                if response.status == 204:
                    return None
                return await read_json(response, "Marker API")
        except asyncio.TimeoutError as e:
            raise ServiceTimeout(f"Marker API {method} timed out") from e
        except aiohttp.ClientError as e:
            raise NetworkFailure(f"Marker API {method} failed: {e}") from e

    async def list_markers(self) -> list[Marker]:
        """Get all markers."""
        data = await self._request("GET", self._url)
        if not isinstance(data, list):
            raise NetworkFailure("Marker API returned a non-list response")
        return [parse_marker(item) for item in data if isinstance(item, dict)]

    async def create_marker(self, draft: MarkerDraft) -> Marker:
        """Persist a new marker.

        Raises:
            ValidationFailure: Empty title or missing position; nothing is sent.
        """
        draft.validate()
        coordinate = cast(Coordinate, draft.coordinate)
        payload = {
            "lat": coordinate.latitude,
            "lng": coordinate.longitude,
            "title": draft.title,
            "description": draft.description,
        }
        data = await self._request("POST", self._url, payload)
        if not isinstance(data, dict):
            raise NetworkFailure("Marker API returned a non-object response")
        return parse_marker(data)

    async def update_marker(self, marker_id: str, draft: MarkerDraft) -> None:
        """Update title and description of a marker.

        Raises:
            ValidationFailure: Empty title; nothing is sent.
            NotFound: If no marker has this id.
        """
        draft.validate(require_coordinate=False)
        payload = {"title": draft.title, "description": draft.description}
        await self._request_existing("PUT", marker_id, payload)

    async def delete_marker(self, marker_id: str) -> None:
        """Delete a marker.

        Raises:
            NotFound: If no marker has this id.
        """
        await self._request_existing("DELETE", marker_id)

    async def _request_existing(
        self, method: str, marker_id: str, payload: dict[str, Any] | None = None
    ) -> None:
        try:
            await self._request(method, f"{self._url}/{marker_id}", payload)
        except NotFound as e:
            raise NotFound(f"Marker {marker_id} not found", status_code=e.status_code) from e
