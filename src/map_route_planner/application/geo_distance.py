"""Great-circle distance between coordinates."""

import math

from map_route_planner.domain.models import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(origin: Coordinate, destination: Coordinate) -> float:
    """Compute the haversine distance in km between two coordinates."""
    lat1 = math.radians(origin.latitude)
    lat2 = math.radians(destination.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(destination.longitude - origin.longitude)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
