"""Human-readable labels for routes and travel durations."""

from map_route_planner.domain.models import RoutePlan


def format_minutes(minutes: float) -> str:
    """Format a route duration, e.g. '45 min' or '2 h 30 min'."""
    total = round(minutes)
    if total < 60:
        return f"{total} min"
    hours, mins = divmod(total, 60)
    return f"{hours} h {mins} min" if mins > 0 else f"{hours} h"


def format_hours(hours: float) -> str:
    """Format a transport mode duration, e.g. '1 h 43 min' or '2 d 5 h'."""
    if round(hours * 60) < 24 * 60:
        return format_minutes(hours * 60)
    days, rest = divmod(round(hours), 24)
    return f"{days} d {rest} h" if rest > 0 else f"{days} d"


def describe_route(plan: RoutePlan, index: int) -> str:
    """Label route ``index`` of a plan for display.

    The best route reads 'Best route - 2 h 30 min (120.0 km)'; alternatives
    read 'Route 2 - 2 h 50 min (131.2 km, +20 min)'.
    """
    route = plan.routes[index]
    summary = f"{format_minutes(route.duration_min)} ({route.distance_km:.1f} km"
    if index == 0:
        return f"{route.name or 'Best route'} - {summary})"

    extra = plan.time_difference_min(index)
    return f"Route {index + 1} - {summary}, +{round(extra)} min)"
