"""Transport mode domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TransportMode:
    """A way of covering a distance, with the derived travel time."""

    name: str
    speed_kmh: float
    icon: str
    duration_hours: float
