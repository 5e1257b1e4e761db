"""Error taxonomy shared by ports, adapters and application services."""


class MapServiceError(Exception):
    """Base class for failures talking to an external map service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkFailure(MapServiceError):
    """Service unreachable or answered with a non-success status."""


class NoRouteFound(NetworkFailure):
    """Routing service answered but produced no usable route."""


class ServiceTimeout(MapServiceError):
    """Client-side deadline exceeded."""


class RateLimited(MapServiceError):
    """Service answered HTTP 429."""


class UpstreamTimeout(MapServiceError):
    """Service answered HTTP 504."""


class NotFound(MapServiceError):
    """Referenced record does not exist."""


class ValidationFailure(ValueError):
    """Input rejected before any network call was made."""
