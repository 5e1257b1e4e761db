"""Tests for viewport-driven POI loading."""

import asyncio

import pytest

from map_route_planner.adapters.memory import InMemoryPoiCache
from map_route_planner.adapters.overpass_api import OverpassPoiService
from map_route_planner.application.poi_aggregator import (
    EXTENDED_CATEGORIES,
    PoiAggregator,
    visible_categories,
)
from map_route_planner.domain.errors import NetworkFailure, RateLimited, UpstreamTimeout
from map_route_planner.domain.models import (
    BoundingBox,
    Coordinate,
    PoiCategory,
    PointOfInterest,
)
from tests.fakes import FakePoiService
from tests.http_server import html_error_app, serve

BOUNDS = BoundingBox(south=-6.25, west=106.80, north=-6.15, east=106.90)

HOSPITAL = PointOfInterest("node/1", Coordinate(-6.20, 106.84), "RS Cipto", PoiCategory.HOSPITAL)
CAMPUS = PointOfInterest("node/2", Coordinate(-6.21, 106.83), "Kampus UI", PoiCategory.UNIVERSITY)
SCHOOL = PointOfInterest("node/3", Coordinate(-6.22, 106.82), "SMA 8", PoiCategory.SCHOOL)


def _aggregator(service: FakePoiService, **kwargs) -> tuple[PoiAggregator, InMemoryPoiCache]:
    cache = InMemoryPoiCache()
    return PoiAggregator(service, cache, **kwargs), cache


def test_when_zoom_is_below_minimum_then_no_categories_are_visible() -> None:
    """Given zoom 10, when resolving categories, then nothing is visible."""
    assert visible_categories(10) == frozenset()


def test_when_zoom_rises_then_visible_categories_only_grow() -> None:
    """Given increasing zoom levels, when resolving categories, then each set contains the previous."""
    previous: frozenset[PoiCategory] = frozenset()
    for zoom in range(0, 20):
        current = visible_categories(zoom)
        assert previous <= current
        previous = current


def test_when_zoom_levels_are_resolved_then_thresholds_match() -> None:
    """Given the zoom thresholds, when resolving, then hospitals/universities, schools, supermarkets appear."""
    assert visible_categories(11) == {PoiCategory.HOSPITAL, PoiCategory.UNIVERSITY}
    assert PoiCategory.SCHOOL in visible_categories(13)
    assert PoiCategory.SCHOOL not in visible_categories(12.9)
    assert PoiCategory.SUPERMARKET in visible_categories(15)
    assert PoiCategory.SUPERMARKET not in visible_categories(14)


def test_when_extended_categories_enabled_then_they_only_appear_at_top_level() -> None:
    """Given extended categories, when resolving, then they appear from zoom 15 only."""
    assert not visible_categories(14, include_extended=True) & EXTENDED_CATEGORIES
    assert EXTENDED_CATEGORIES <= visible_categories(15, include_extended=True)
    assert not visible_categories(15) & EXTENDED_CATEGORIES


@pytest.mark.asyncio
async def test_when_viewport_changes_at_high_zoom_then_cache_is_replaced() -> None:
    """Given a successful fetch, when the viewport changes, then the cache holds the result."""
    service = FakePoiService(pois=[HOSPITAL, CAMPUS])
    aggregator, cache = _aggregator(service)

    loaded = await aggregator.on_viewport_changed(BOUNDS, 12)

    assert loaded
    assert aggregator.pois == [HOSPITAL, CAMPUS]
    assert service.calls == [(BOUNDS, frozenset({PoiCategory.HOSPITAL, PoiCategory.UNIVERSITY}))]
    assert aggregator.last_bounds == BOUNDS
    assert aggregator.last_zoom == 12
    assert aggregator.last_error is None


@pytest.mark.asyncio
async def test_when_second_fetch_succeeds_then_previous_results_are_not_merged() -> None:
    """Given two fetches, when the second succeeds, then only its places remain."""
    service = FakePoiService(pois=[HOSPITAL, CAMPUS])
    aggregator, _ = _aggregator(service)
    await aggregator.on_viewport_changed(BOUNDS, 12)

    service.pois = [SCHOOL]
    await aggregator.on_viewport_changed(BOUNDS, 13)

    assert aggregator.pois == [SCHOOL]


@pytest.mark.asyncio
async def test_when_zoomed_out_below_minimum_then_cache_is_cleared_without_request() -> None:
    """Given a filled cache, when zooming out to 10, then the cache empties and nothing is fetched."""
    service = FakePoiService(pois=[HOSPITAL])
    aggregator, cache = _aggregator(service)
    await aggregator.on_viewport_changed(BOUNDS, 12)

    loaded = await aggregator.on_viewport_changed(BOUNDS, 10)

    assert not loaded
    assert len(cache) == 0
    assert len(service.calls) == 1


@pytest.mark.asyncio
async def test_when_fetch_is_in_flight_then_second_trigger_is_a_no_op() -> None:
    """Given a pending fetch, when another trigger arrives, then no second request is issued."""
    service = FakePoiService(pois=[HOSPITAL])
    service.block = True
    aggregator, _ = _aggregator(service)

    first = asyncio.create_task(aggregator.on_viewport_changed(BOUNDS, 12))
    await asyncio.sleep(0)
    assert aggregator.in_flight

    second = await aggregator.on_viewport_changed(BOUNDS, 13)
    service.release.set()
    first_loaded = await first

    assert second is False
    assert first_loaded is True
    assert len(service.calls) == 1
    assert not aggregator.in_flight


@pytest.mark.asyncio
async def test_when_fetch_exceeds_deadline_then_cache_is_kept_and_error_recorded() -> None:
    """Given a fetch that never finishes, when the deadline passes, then the old cache survives."""
    service = FakePoiService(pois=[HOSPITAL])
    aggregator, _ = _aggregator(service, fetch_timeout_seconds=0.01)
    await aggregator.on_viewport_changed(BOUNDS, 12)

    service.block = True
    loaded = await aggregator.on_viewport_changed(BOUNDS, 12)

    assert not loaded
    assert aggregator.pois == [HOSPITAL]
    assert aggregator.last_error is not None
    assert aggregator.last_error.reason == "Request timed out"
    assert not aggregator.in_flight


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, reason",
    [
        (RateLimited("too many", status_code=429), "Rate limit exceeded"),
        (UpstreamTimeout("gateway", status_code=504), "Gateway timeout"),
        (NetworkFailure("unreachable"), "unreachable"),
    ],
)
async def test_when_service_fails_then_cache_is_unchanged(error: Exception, reason: str) -> None:
    """Given a filled cache, when the next fetch fails, then the cache is untouched."""
    service = FakePoiService(pois=[HOSPITAL, CAMPUS])
    aggregator, _ = _aggregator(service)
    await aggregator.on_viewport_changed(BOUNDS, 12)

    service.error = error
    loaded = await aggregator.on_viewport_changed(BOUNDS, 13)

    assert not loaded
    assert aggregator.pois == [HOSPITAL, CAMPUS]
    assert aggregator.last_error is not None
    assert aggregator.last_error.reason == reason


@pytest.mark.asyncio
async def test_when_fetch_succeeds_after_failure_then_error_is_reset() -> None:
    """Given a failed fetch, when the next one succeeds, then last_error is cleared."""
    service = FakePoiService(error=RateLimited("slow down", status_code=429))
    aggregator, _ = _aggregator(service)
    await aggregator.on_viewport_changed(BOUNDS, 12)

    service.error = None
    service.pois = [HOSPITAL]
    await aggregator.on_viewport_changed(BOUNDS, 12)

    assert aggregator.last_error is None


@pytest.mark.asyncio
async def test_when_cache_is_cleared_during_fetch_then_stale_result_is_discarded() -> None:
    """Given a pending fetch, when the cache is cleared meanwhile, then the result is dropped."""
    service = FakePoiService(pois=[HOSPITAL])
    service.block = True
    aggregator, cache = _aggregator(service)

    pending = asyncio.create_task(aggregator.on_viewport_changed(BOUNDS, 12))
    await asyncio.sleep(0)
    aggregator.clear()
    service.release.set()

    assert await pending is False
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_when_filtering_cached_pois_then_no_request_is_made() -> None:
    """Given cached places, when filtering by category, then the cache is filtered locally."""
    service = FakePoiService(pois=[HOSPITAL, CAMPUS, SCHOOL])
    aggregator, _ = _aggregator(service)
    await aggregator.on_viewport_changed(BOUNDS, 13)

    hospitals = aggregator.filter_cached({PoiCategory.HOSPITAL})

    assert hospitals == [HOSPITAL]
    assert aggregator.filter_cached() == [HOSPITAL, CAMPUS, SCHOOL]
    assert len(service.calls) == 1


@pytest.mark.asyncio
async def test_when_overpass_answers_html_then_cache_is_kept_and_error_recorded() -> None:
    """Given an Overpass endpoint serving an HTML page, when the viewport changes, then the cache survives."""
    async with serve(html_error_app("POST", "/api/interpreter")) as (base_url, session):
        service = OverpassPoiService(
            session, url=f"{base_url}/api/interpreter", min_delay_seconds=0
        )
        cache = InMemoryPoiCache()
        cache.replace([HOSPITAL, CAMPUS])
        aggregator = PoiAggregator(service, cache)

        loaded = await aggregator.on_viewport_changed(BOUNDS, 12)

    assert not loaded
    assert aggregator.pois == [HOSPITAL, CAMPUS]
    assert aggregator.last_error is not None
    assert aggregator.last_error.status_code is None
    assert "non-JSON" in aggregator.last_error.reason


@pytest.mark.asyncio
async def test_when_service_returns_places_outside_bounds_then_they_are_dropped() -> None:
    """Given a result with a place beyond the viewport, when loading, then only inside places are cached."""
    outside = PointOfInterest("node/9", Coordinate(-6.50, 106.84), "RS Bogor", PoiCategory.HOSPITAL)
    on_edge = PointOfInterest("node/8", Coordinate(-6.15, 106.90), "RS Sudut", PoiCategory.HOSPITAL)
    service = FakePoiService(pois=[HOSPITAL, outside, on_edge])
    aggregator, _ = _aggregator(service)

    loaded = await aggregator.on_viewport_changed(BOUNDS, 12)

    assert loaded
    assert aggregator.pois == [HOSPITAL, on_edge]
