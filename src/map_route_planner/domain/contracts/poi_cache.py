"""Protocol for point of interest caching."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from map_route_planner.domain.models.point_of_interest import PointOfInterest


class PoiCacheProtocol(Protocol):
    """Protocol for holding the currently loaded points of interest."""

    def get_all(self) -> list["PointOfInterest"]:
        """Get the cached points of interest.

        Returns:
            List of cached points of interest, or empty list if nothing is loaded.
        """
        ...

    def replace(self, pois: list["PointOfInterest"]) -> None:
        """Replace the whole cache with a new result set.

        Args:
            pois: The points of interest to cache.
        """
        ...

    def clear(self) -> None:
        """Drop all cached points of interest."""
        ...
