"""Nominatim geocoding adapter."""

from map_route_planner.adapters.nominatim_api.nominatim_geocoding_service import (
    NominatimGeocodingService,
)

__all__ = ["NominatimGeocodingService"]
