"""Marker domain models."""

from dataclasses import dataclass
from datetime import datetime

from map_route_planner.domain.errors import ValidationFailure
from map_route_planner.domain.models.coordinate import Coordinate


@dataclass(frozen=True)
class Marker:
    """A user-placed marker as returned by the persistence collaborator."""

    id: str
    coordinate: Coordinate
    title: str
    description: str = ""
    created_at: datetime | None = None


@dataclass(frozen=True)
class MarkerDraft:
    """Payload for creating or updating a marker."""

    coordinate: Coordinate | None
    title: str
    description: str = ""

    def has_title(self) -> bool:
        """Whether the draft carries a non-blank title."""
        return bool(self.title and self.title.strip())

    def validate(self, require_coordinate: bool = True) -> None:
        """Raise ValidationFailure if the draft cannot be saved.

        Args:
            require_coordinate: Creating needs a position, updating does not.
        """
        if not self.has_title():
            raise ValidationFailure("Marker title must not be empty")
        if require_coordinate and self.coordinate is None:
            raise ValidationFailure("Marker position is required")
