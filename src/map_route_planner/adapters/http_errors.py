"""Translation of HTTP outcomes into the domain error taxonomy."""

import logging
from typing import TYPE_CHECKING, Any

from map_route_planner.domain.errors import (
    MapServiceError,
    NetworkFailure,
    NotFound,
    RateLimited,
    UpstreamTimeout,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse


def error_for_status(status: int, message: str) -> MapServiceError:
    """Map a non-success HTTP status to the matching domain error."""
    if status == 429:
        return RateLimited(f"Rate limit exceeded: {message}", status_code=status)
    if status == 504:
        return UpstreamTimeout(f"Gateway timeout: {message}", status_code=status)
    if status == 404:
        return NotFound(message, status_code=status)
    return NetworkFailure(f"HTTP {status}: {message}", status_code=status)


async def raise_for_status(response: "ClientResponse", service: str) -> None:
    """Raise the domain error for a non-2xx response.

    Args:
        response: The aiohttp response.
        service: Service name used in the error message.
    """
    if 200 <= response.status < 300:
        return

    body = await response.text()
    retry_after = response.headers.get("Retry-After")
    extra = f" [Retry-After: {retry_after}]" if retry_after else ""
    logger.debug(f"{service} returned status {response.status}: {body[:200]}{extra}")
    raise error_for_status(response.status, f"{service} request failed{extra}")


async def read_json(response: "ClientResponse", service: str) -> Any:
    """Decode a JSON body regardless of its declared content type.

    Raises:
        NetworkFailure: If the body is not JSON, e.g. a proxy error page.
    """
    try:
        return await response.json(content_type=None)
    except ValueError as e:
        content_type = response.headers.get("Content-Type", "unknown")
        raise NetworkFailure(f"{service} returned a non-JSON body ({content_type})") from e
