"""Overpass QL query construction."""

from collections.abc import Iterable

from map_route_planner.adapters.overpass_api.constants import CATEGORY_TAGS
from map_route_planner.domain.models import BoundingBox, PoiCategory


def build_query(
    bounds: BoundingBox, categories: Iterable[PoiCategory], timeout_seconds: int = 25
) -> str:
    """Build a union query for nodes carrying any of the categories' tags.

    Categories without a tag mapping (``other``) are skipped. Categories are
    emitted in a stable order so identical requests produce identical queries.
    """
    bbox = bounds.as_overpass_bbox()
    wanted = set(categories)
    statements = [
        f'  node["{key}"="{value}"]({bbox});'
        for category, (key, value) in CATEGORY_TAGS.items()
        if category in wanted
    ]
    body = "\n".join(statements)
    return f"[out:json][timeout:{timeout_seconds}];\n(\n{body}\n);\nout body;"
