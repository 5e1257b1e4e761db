"""Point of interest domain model."""

from dataclasses import dataclass
from enum import Enum

from map_route_planner.domain.models.coordinate import Coordinate


class PoiCategory(str, Enum):
    """Categories a point of interest can be tagged with."""

    HOSPITAL = "hospital"
    UNIVERSITY = "university"
    SCHOOL = "school"
    SUPERMARKET = "supermarket"
    RESTAURANT = "restaurant"
    BANK = "bank"
    FUEL = "fuel"
    HOTEL = "hotel"
    WORSHIP = "worship"
    OTHER = "other"


@dataclass(frozen=True)
class PointOfInterest:
    """A categorized place loaded from the spatial-query service."""

    id: str
    coordinate: Coordinate
    title: str
    category: PoiCategory = PoiCategory.OTHER
