"""Route domain models."""

from dataclasses import dataclass, field, replace

from map_route_planner.domain.models.coordinate import Coordinate
from map_route_planner.domain.models.transport_mode import TransportMode


@dataclass(frozen=True)
class Route:
    """A drivable path between two or more points."""

    coordinates: tuple[Coordinate, ...]
    distance_km: float
    duration_min: float
    is_best: bool = False
    name: str = ""

    def __post_init__(self) -> None:
        """Enforce the minimal shape of a route."""
        if len(self.coordinates) < 2:
            raise ValueError("A route needs at least two coordinates")
        if self.distance_km < 0 or self.duration_min < 0:
            raise ValueError("Route distance and duration must not be negative")

    def as_best(self, name: str) -> "Route":
        """Copy of this route marked as the best candidate."""
        return replace(self, is_best=True, name=name)

    def as_alternative(self, name: str) -> "Route":
        """Copy of this route marked as an alternative."""
        return replace(self, is_best=False, name=name)


@dataclass(frozen=True)
class RoutePlan:
    """Result of one route computation between two points.

    ``routes`` is never empty; index 0 is the best route and every other
    entry takes strictly longer.
    """

    origin: Coordinate
    destination: Coordinate
    routes: tuple[Route, ...]
    modes: tuple[TransportMode, ...] = field(default_factory=tuple)
    is_fallback: bool = False

    def __post_init__(self) -> None:
        """Check the best-route invariants."""
        if not self.routes:
            raise ValueError("A route plan needs at least one route")
        best = self.routes[0]
        if not best.is_best:
            raise ValueError("The first route of a plan must be the best route")
        for alternative in self.routes[1:]:
            if alternative.is_best:
                raise ValueError("Only the first route of a plan may be the best route")
            if alternative.duration_min <= best.duration_min:
                raise ValueError("Alternative routes must take longer than the best route")

    @property
    def best(self) -> Route:
        """The best (index 0) route."""
        return self.routes[0]

    @property
    def distance_km(self) -> float:
        """Distance of the best route."""
        return self.best.distance_km

    @property
    def alternatives(self) -> tuple[Route, ...]:
        return self.routes[1:]

    def time_difference_min(self, index: int) -> float:
        """Extra minutes route ``index`` takes compared to the best route."""
        return self.routes[index].duration_min - self.best.duration_min
