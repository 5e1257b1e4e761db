"""Travel time estimates per transport mode for a given distance."""

from dataclasses import dataclass

from map_route_planner.domain.models import TransportMode


@dataclass(frozen=True)
class _ModeBand:
    """A distance band in km (lower inclusive, upper exclusive) and the mode it adds."""

    name: str
    speed_kmh: float
    icon: str
    min_km: float | None = None
    max_km: float | None = None

    def applies_to(self, distance_km: float) -> bool:
        if self.min_km is not None and distance_km < self.min_km:
            return False
        return not (self.max_km is not None and distance_km >= self.max_km)


# Bands overlap on purpose: a 300 km trip gets car, bus and train.
DISTANCE_BANDS: tuple[_ModeBand, ...] = (
    _ModeBand("Motorcycle", 40, "mdi:motorbike", max_km=50),
    _ModeBand("Car", 60, "mdi:car", max_km=50),
    _ModeBand("Car", 80, "mdi:car", min_km=50, max_km=500),
    _ModeBand("Bus", 70, "mdi:bus", min_km=50, max_km=500),
    _ModeBand("Train", 120, "mdi:train", min_km=200, max_km=1000),
    _ModeBand("Plane", 800, "mdi:airplane", min_km=500),
)

ACTIVE_MODE_BANDS: tuple[_ModeBand, ...] = (
    _ModeBand("Walking", 5, "mdi:walk"),
    _ModeBand("Cycling", 15, "mdi:bike"),
)


class TransportModeEstimator:
    """Maps a distance to the transport modes that make sense for it."""

    def __init__(self, include_active_modes: bool = False) -> None:
        """Initialize the estimator.

        Args:
            include_active_modes: Also offer walking and cycling for every distance.
        """
        self.include_active_modes = include_active_modes

    def estimate_modes(self, distance_km: float) -> list[TransportMode]:
        """Get the transport modes for a distance, in band order.

        Callers must pass a positive distance; zero or negative distances
        produce a degenerate (possibly empty) list.

        Args:
            distance_km: Distance to cover in kilometres.

        Returns:
            Transport modes with duration_hours = distance_km / speed_kmh.
        """
        bands = list(DISTANCE_BANDS)
        if self.include_active_modes:
            bands.extend(ACTIVE_MODE_BANDS)

        return [
            TransportMode(
                name=band.name,
                speed_kmh=band.speed_kmh,
                icon=band.icon,
                duration_hours=distance_km / band.speed_kmh,
            )
            for band in bands
            if band.applies_to(distance_km)
        ]
