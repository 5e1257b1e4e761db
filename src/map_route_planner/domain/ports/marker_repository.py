"""Marker repository port."""

from typing import Protocol

from map_route_planner.domain.models.marker import Marker, MarkerDraft


class MarkerRepository(Protocol):
    """Port for the marker persistence collaborator."""

    async def list_markers(self) -> list[Marker]:
        """Get all markers."""
        ...

    async def create_marker(self, draft: MarkerDraft) -> Marker:
        """Persist a new marker."""
        ...

    async def update_marker(self, marker_id: str, draft: MarkerDraft) -> None:
        """Update title and description of an existing marker.

        Raises:
            NotFound: If no marker has this id.
        """
        ...

    async def delete_marker(self, marker_id: str) -> None:
        """Delete a marker.

        Raises:
            NotFound: If no marker has this id.
        """
        ...
