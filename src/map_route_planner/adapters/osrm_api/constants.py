"""Constants for the OSRM routing adapter.

API Documentation: http://project-osrm.org/docs/v5.24.0/api/#route-service
"""

DEFAULT_OSRM_BASE_URL = "https://router.project-osrm.org"

# Full geometry as GeoJSON [lon, lat] pairs
ROUTE_PARAMS = {
    "overview": "full",
    "geometries": "geojson",
}

DEFAULT_HEADERS = {
    "Accept": "application/json",
}

OK_CODE = "Ok"
