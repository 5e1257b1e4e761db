"""Composition root: wires adapters into a map session."""

import logging
import sys
from typing import TYPE_CHECKING

from map_route_planner.adapters.config import AppConfig
from map_route_planner.adapters.marker_api import HttpMarkerRepository
from map_route_planner.adapters.memory import InMemoryPoiCache
from map_route_planner.adapters.nominatim_api import NominatimGeocodingService
from map_route_planner.adapters.osrm_api import OsrmRoutingService
from map_route_planner.adapters.overpass_api import OverpassPoiService
from map_route_planner.application import (
    MapSession,
    PoiAggregator,
    RouteOrchestrator,
    TransportModeEstimator,
)

if TYPE_CHECKING:
    from aiohttp import ClientSession


def configure_logging(config: AppConfig) -> None:
    """Configure root logging once, at process start."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def create_map_session(config: AppConfig, session: "ClientSession") -> MapSession:
    """Build a map session backed by the configured HTTP services.

    Args:
        config: Application configuration.
        session: aiohttp session shared by all adapters; owned by the caller.
    """
    routing_service = OsrmRoutingService(
        session,
        base_url=config.osrm_base_url,
        profile=config.osrm_profile,
        timeout_seconds=config.routing_timeout_seconds,
    )
    poi_service = OverpassPoiService(
        session,
        url=config.overpass_url,
        query_timeout_seconds=config.overpass_query_timeout_seconds,
        min_delay_seconds=config.overpass_min_delay_seconds,
    )
    geocoder = NominatimGeocodingService(
        session,
        base_url=config.nominatim_base_url,
        user_agent=config.nominatim_user_agent,
        min_delay_seconds=config.nominatim_min_delay_seconds,
    )

    return MapSession(
        route_orchestrator=RouteOrchestrator(
            routing_service,
            TransportModeEstimator(include_active_modes=config.include_active_modes),
        ),
        poi_aggregator=PoiAggregator(
            poi_service,
            InMemoryPoiCache(),
            fetch_timeout_seconds=config.poi_fetch_timeout_seconds,
            include_extended_categories=config.include_extended_categories,
        ),
        marker_repository=HttpMarkerRepository(session, url=config.marker_api_url),
        geocoder=geocoder,
        search_result_limit=config.search_result_limit,
    )
