"""Coordinate and bounding box domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 point expressed as latitude/longitude in degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Reject coordinates outside the valid degree ranges."""
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be within [-90, 90], got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude must be within [-180, 180], got {self.longitude}")

    def as_lon_lat(self) -> str:
        """Render as 'lon,lat', the order used by routing services."""
        return f"{self.longitude},{self.latitude}"

    def midpoint(self, other: "Coordinate") -> "Coordinate":
        """Arithmetic midpoint in degree space (not the great-circle midpoint)."""
        return Coordinate(
            latitude=(self.latitude + other.latitude) / 2,
            longitude=(self.longitude + other.longitude) / 2,
        )

    def offset(self, delta_latitude: float) -> "Coordinate":
        """Return a copy shifted north (positive) or south (negative), clamped to the poles."""
        return Coordinate(
            latitude=max(-90.0, min(90.0, self.latitude + delta_latitude)),
            longitude=self.longitude,
        )


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular viewport given by its latitude/longitude extrema."""

    south: float
    west: float
    north: float
    east: float

    def __post_init__(self) -> None:
        """Reject inverted latitude bounds."""
        if self.south > self.north:
            raise ValueError(f"south ({self.south}) must not exceed north ({self.north})")

    def as_overpass_bbox(self) -> str:
        """Render as 'south,west,north,east' for spatial queries."""
        return f"{self.south},{self.west},{self.north},{self.east}"

    def contains(self, coordinate: Coordinate) -> bool:
        """Check whether a coordinate lies inside the box (edges inclusive)."""
        if not self.south <= coordinate.latitude <= self.north:
            return False
        if self.west <= self.east:
            return self.west <= coordinate.longitude <= self.east
        # Box crosses the antimeridian
        return coordinate.longitude >= self.west or coordinate.longitude <= self.east
