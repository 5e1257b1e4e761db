"""Command line access to route planning, place search and POI loading."""

import argparse
import asyncio
import json
import sys
from typing import Any

import aiohttp

from map_route_planner.adapters.config import AppConfig
from map_route_planner.application.route_formatting import describe_route, format_hours
from map_route_planner.bootstrap import configure_logging, create_map_session
from map_route_planner.domain.errors import MapServiceError
from map_route_planner.domain.models import BoundingBox, Coordinate, RoutePlan


def parse_coordinate(text: str) -> Coordinate:
    """Parse 'lat,lon' into a Coordinate."""
    try:
        lat_text, lon_text = text.split(",")
        return Coordinate(latitude=float(lat_text), longitude=float(lon_text))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected 'lat,lon', got '{text}': {e}") from e


def parse_bounds(text: str) -> BoundingBox:
    """Parse 'south,west,north,east' into a BoundingBox."""
    try:
        south, west, north, east = (float(part) for part in text.split(","))
        return BoundingBox(south=south, west=west, north=north, east=east)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"Expected 'south,west,north,east', got '{text}': {e}"
        ) from e


def _coordinate_to_list(coordinate: Coordinate) -> list[float]:
    return [coordinate.latitude, coordinate.longitude]


def route_plan_to_dict(plan: RoutePlan) -> dict[str, Any]:
    """Serialize a route plan for JSON output."""
    return {
        "origin": _coordinate_to_list(plan.origin),
        "destination": _coordinate_to_list(plan.destination),
        "is_fallback": plan.is_fallback,
        "distance_km": plan.distance_km,
        "routes": [
            {
                "name": route.name,
                "is_best": route.is_best,
                "distance_km": route.distance_km,
                "duration_min": route.duration_min,
                "coordinates": [_coordinate_to_list(c) for c in route.coordinates],
            }
            for route in plan.routes
        ],
        "modes": [
            {
                "name": mode.name,
                "speed_kmh": mode.speed_kmh,
                "icon": mode.icon,
                "duration_hours": mode.duration_hours,
            }
            for mode in plan.modes
        ],
    }


def print_route_plan(plan: RoutePlan) -> None:
    """Print a route plan for humans."""
    if plan.is_fallback:
        print("Routing service unavailable, showing straight-line distance.\n")
    for index in range(len(plan.routes)):
        print(f"  {describe_route(plan, index)}")
    if plan.modes:
        print("\nTravel time by mode:")
        for mode in plan.modes:
            print(f"  {mode.name:<12} {format_hours(mode.duration_hours)}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Map route planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Routes and travel times between Jakarta and Bandung
  map-route-planner route --from=-6.20,106.82 --to=-6.90,107.62

  # Search markers and places
  map-route-planner search "Monas"

  # Points of interest in a viewport at zoom 15
  map-route-planner pois --bounds=-6.21,106.81,-6.19,106.83 --zoom 15
        """,
    )
    parser.add_argument("--config", help="Optional TOML file with setting overrides")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    route_parser = subparsers.add_parser("route", help="Compute routes between two points")
    # Negative values only parse in the --opt=value form, e.g. --from=-6.2,106.8
    route_parser.add_argument(
        "--from", dest="origin", type=parse_coordinate, required=True, help="Origin as lat,lon"
    )
    route_parser.add_argument(
        "--to",
        dest="destination",
        type=parse_coordinate,
        required=True,
        help="Destination as lat,lon",
    )
    route_parser.add_argument("--json", action="store_true", help="Output as JSON")

    search_parser = subparsers.add_parser("search", help="Search markers and places")
    search_parser.add_argument("query", help="Free-text query")
    search_parser.add_argument(
        "--no-markers", action="store_true", help="Don't load markers from the marker API"
    )
    search_parser.add_argument("--json", action="store_true", help="Output as JSON")

    pois_parser = subparsers.add_parser("pois", help="Load points of interest for a viewport")
    pois_parser.add_argument(
        "--bounds", type=parse_bounds, required=True, help="Viewport as south,west,north,east"
    )
    pois_parser.add_argument("--zoom", type=float, required=True, help="Map zoom level")
    pois_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


async def _run(args: argparse.Namespace, config: AppConfig) -> int:
    async with aiohttp.ClientSession() as http_session:
        session = create_map_session(config, http_session)
        try:
            if args.command == "route":
                await session.on_point_selected(args.origin)
                plan = await session.on_point_selected(args.destination)
                if plan is None:
                    print("Origin and destination must differ", file=sys.stderr)
                    return 1
                if args.json:
                    print(json.dumps(route_plan_to_dict(plan), indent=2))
                else:
                    print_route_plan(plan)

            elif args.command == "search":
                if not args.no_markers:
                    try:
                        await session.load_markers()
                    except MapServiceError as e:
                        print(f"Markers unavailable: {e}", file=sys.stderr)
                results = await session.search_all(args.query)
                if args.json:
                    print(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
                elif not results:
                    print(f"No results for '{args.query}'", file=sys.stderr)
                    return 1
                else:
                    for result in results:
                        print(
                            f"  [{result.variant}] {result.title} "
                            f"({result.coordinate.latitude:.5f}, {result.coordinate.longitude:.5f})"
                        )

            elif args.command == "pois":
                loaded = await session.on_viewport_changed(args.bounds, args.zoom)
                pois = session.pois
                if args.json:
                    print(
                        json.dumps(
                            [
                                {
                                    "id": poi.id,
                                    "title": poi.title,
                                    "category": poi.category.value,
                                    "lat": poi.coordinate.latitude,
                                    "lon": poi.coordinate.longitude,
                                }
                                for poi in pois
                            ],
                            indent=2,
                            ensure_ascii=False,
                        )
                    )
                elif not loaded:
                    reason = session.poi_error.reason if session.poi_error else "zoom too low"
                    print(f"No points of interest loaded ({reason})", file=sys.stderr)
                    return 1
                else:
                    for poi in pois:
                        print(f"  [{poi.category.value}] {poi.title}")
        finally:
            session.close()
    return 0


async def main() -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = AppConfig()
    if args.config:
        config.config_file = args.config
        config.load_toml_overrides()
    configure_logging(config)

    sys.exit(await _run(args, config))


def cli_main() -> None:
    """CLI entry point for the console script."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
