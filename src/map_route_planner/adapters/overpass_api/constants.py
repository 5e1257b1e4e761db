"""Constants for the Overpass POI adapter.

API Documentation: https://wiki.openstreetmap.org/wiki/Overpass_API
"""

from map_route_planner.domain.models import PoiCategory

DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"

# Category -> OSM tag (key, value) used to query and to classify results
CATEGORY_TAGS: dict[PoiCategory, tuple[str, str]] = {
    PoiCategory.HOSPITAL: ("amenity", "hospital"),
    PoiCategory.UNIVERSITY: ("amenity", "university"),
    PoiCategory.SCHOOL: ("amenity", "school"),
    PoiCategory.SUPERMARKET: ("shop", "supermarket"),
    PoiCategory.RESTAURANT: ("amenity", "restaurant"),
    PoiCategory.BANK: ("amenity", "bank"),
    PoiCategory.FUEL: ("amenity", "fuel"),
    PoiCategory.HOTEL: ("tourism", "hotel"),
    PoiCategory.WORSHIP: ("amenity", "place_of_worship"),
}

UNNAMED_TITLE = "Unnamed"

DEFAULT_HEADERS = {
    "Accept": "application/json",
}
