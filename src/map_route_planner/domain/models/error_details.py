"""Error details domain model."""

from pydantic import BaseModel, ConfigDict

from map_route_planner.domain.errors import (
    MapServiceError,
    RateLimited,
    ServiceTimeout,
    UpstreamTimeout,
)


class ErrorDetails(BaseModel):
    """Details about a failed fetch, including HTTP status code if applicable."""

    model_config = ConfigDict(frozen=True)

    status_code: int | None = None
    reason: str

    @classmethod
    def from_error(cls, error: Exception) -> "ErrorDetails":
        """Build a passive failure signal from a service error."""
        status_code = error.status_code if isinstance(error, MapServiceError) else None

        if isinstance(error, RateLimited) or status_code == 429:
            reason = "Rate limit exceeded"
        elif isinstance(error, UpstreamTimeout) or status_code == 504:
            reason = "Gateway timeout"
        elif isinstance(error, ServiceTimeout | TimeoutError):
            reason = "Request timed out"
        elif status_code == 502:
            reason = "Bad gateway (server error)"
        elif status_code == 503:
            reason = "Service unavailable"
        elif status_code is not None:
            reason = f"HTTP {status_code}"
        else:
            reason = str(error) or "Unknown error"

        return cls(status_code=status_code, reason=reason)
