"""Tests for the unified location search."""

import pytest

from map_route_planner.application.location_search_index import LocationSearchIndex
from map_route_planner.domain.errors import RateLimited
from map_route_planner.domain.models import (
    Coordinate,
    Marker,
    MarkerSearchResult,
    PlaceSearchResult,
    PoiCategory,
    PointOfInterest,
)
from tests.fakes import FakeGeocoder

MONAS = Marker("m1", Coordinate(-6.1754, 106.8272), "Monas", "National monument")
OFFICE = Marker("m2", Coordinate(-6.2000, 106.8200), "Office", "Near the monument park")
MOSQUE = PointOfInterest(
    "node/7", Coordinate(-6.1702, 106.8310), "Masjid Istiqlal", PoiCategory.WORSHIP
)
MONUMENT_POI = PointOfInterest(
    "node/8", Coordinate(-6.1750, 106.8270), "Monument Square", PoiCategory.OTHER
)
PLACE = PlaceSearchResult(title="Monas, Gambir, Jakarta", coordinate=Coordinate(-6.17, 106.82))


def _index(markers=(), pois=(), geocoder=None, result_limit=5) -> LocationSearchIndex:
    return LocationSearchIndex(
        markers=lambda: list(markers),
        pois=lambda: list(pois),
        geocoder=geocoder,
        result_limit=result_limit,
    )


def test_when_query_is_blank_then_no_results() -> None:
    """Given markers, when searching for whitespace, then nothing matches."""
    assert _index(markers=[MONAS]).search("   ") == []


def test_when_query_differs_in_case_then_marker_still_matches() -> None:
    """Given a marker titled Monas, when searching 'mONaS', then it is found."""
    results = _index(markers=[MONAS]).search("mONaS")

    assert len(results) == 1
    assert results[0].variant == "marker"
    assert results[0].source_id == "m1"


def test_when_query_matches_marker_description_then_marker_is_found() -> None:
    """Given a marker description containing the query, when searching, then it matches."""
    results = _index(markers=[MONAS, OFFICE]).search("park")

    assert [r.title for r in results] == ["Office"]


def test_when_markers_and_pois_match_then_markers_come_first() -> None:
    """Given matching markers and POIs, when searching, then markers precede POIs."""
    results = _index(markers=[MONAS, OFFICE], pois=[MONUMENT_POI]).search("monument")

    assert [r.variant for r in results] == ["marker", "marker", "poi"]
    assert results[2].category == PoiCategory.OTHER


def test_when_many_entries_match_then_results_are_capped() -> None:
    """Given more matches than the limit, when searching, then only the limit is returned."""
    markers = [Marker(f"m{i}", Coordinate(0, 0), f"Cafe {i}") for i in range(8)]

    assert len(_index(markers=markers).search("cafe")) == 5
    assert len(_index(markers=markers, result_limit=3).search("cafe")) == 3


@pytest.mark.asyncio
async def test_when_geocoder_fails_then_place_search_returns_nothing() -> None:
    """Given a rate-limited geocoder, when searching places, then an empty list comes back."""
    index = _index(geocoder=FakeGeocoder(error=RateLimited("slow down", status_code=429)))

    assert await index.search_places("Monas") == []


@pytest.mark.asyncio
async def test_when_no_geocoder_then_place_search_returns_nothing() -> None:
    """Given no geocoder, when searching places, then nothing is returned."""
    assert await _index().search_places("Monas") == []


@pytest.mark.asyncio
async def test_when_searching_all_then_local_results_precede_places() -> None:
    """Given a marker and a geocoder hit, when searching all, then the marker comes first."""
    geocoder = FakeGeocoder(places=[PLACE])
    index = _index(markers=[MONAS], geocoder=geocoder)

    results = await index.search_all(" Monas ")

    assert [r.variant for r in results] == ["marker", "place"]
    assert geocoder.queries == ["Monas"]


def test_when_resolving_marker_result_then_marker_is_returned() -> None:
    """Given a marker result, when resolving, then the original marker is found by id."""
    index = _index(markers=[MONAS, OFFICE])
    result = MarkerSearchResult(
        title="renamed", coordinate=OFFICE.coordinate, source_id="m2"
    )

    assert index.resolve_marker(result) is OFFICE


def test_when_resolving_place_result_then_none_is_returned() -> None:
    """Given a place result, when resolving, then no marker is returned."""
    assert _index(markers=[MONAS]).resolve_marker(PLACE) is None
