"""Tests for the map session."""

from unittest.mock import patch

import pytest

from map_route_planner.adapters.memory import InMemoryPoiCache
from map_route_planner.application import MapSession, PoiAggregator, RouteOrchestrator
from map_route_planner.domain.errors import NotFound, ValidationFailure
from map_route_planner.domain.models import (
    BoundingBox,
    Coordinate,
    Marker,
    MarkerDraft,
    PoiCategory,
    PointOfInterest,
)
from tests.fakes import FakeMarkerRepository, FakePoiService, FakeRoutingService, make_route

ORIGIN = Coordinate(-6.2088, 106.8456)
DESTINATION = Coordinate(-6.9175, 107.6191)
MONAS = Marker("m1", Coordinate(-6.1754, 106.8272), "Monas")


def _session(
    repository: FakeMarkerRepository | None = None,
    poi_service: FakePoiService | None = None,
) -> MapSession:
    routing = FakeRoutingService(
        direct=make_route(150, 180),
        north=make_route(160, 200),
        south=make_route(170, 220),
    )
    return MapSession(
        route_orchestrator=RouteOrchestrator(routing),
        poi_aggregator=PoiAggregator(poi_service or FakePoiService(), InMemoryPoiCache()),
        marker_repository=repository,
    )


@pytest.mark.asyncio
async def test_when_second_point_is_selected_then_route_is_computed() -> None:
    """Given one selected point, when selecting another, then a route plan is computed."""
    session = _session()

    first = await session.on_point_selected(ORIGIN)
    plan = await session.on_point_selected(DESTINATION)

    assert first is None
    assert plan is not None
    assert session.route_plan is plan
    assert len(plan.routes) == 3
    assert session.selected_route_index == 0


@pytest.mark.asyncio
async def test_when_selected_point_is_selected_again_then_it_is_deselected() -> None:
    """Given a computed route, when reselecting an endpoint, then it is removed and the route cleared."""
    session = _session()
    await session.on_point_selected(ORIGIN)
    await session.on_point_selected(DESTINATION)

    await session.on_point_selected(DESTINATION)

    assert session.selected_points == [ORIGIN]
    assert session.route_plan is None


@pytest.mark.asyncio
async def test_when_selection_is_complete_then_third_point_is_ignored() -> None:
    """Given two selected points, when selecting a third, then the selection is unchanged."""
    session = _session()
    await session.on_point_selected(ORIGIN)
    await session.on_point_selected(DESTINATION)

    result = await session.on_point_selected(Coordinate(0, 0))

    assert result is None
    assert session.selected_points == [ORIGIN, DESTINATION]


@pytest.mark.asyncio
async def test_when_selecting_route_index_then_bounds_are_checked() -> None:
    """Given a plan with three routes, when selecting indexes, then out-of-range is rejected."""
    session = _session()
    with pytest.raises(RuntimeError):
        session.select_route(0)

    await session.on_point_selected(ORIGIN)
    await session.on_point_selected(DESTINATION)

    session.select_route(2)
    assert session.selected_route_index == 2
    with pytest.raises(IndexError):
        session.select_route(3)


@pytest.mark.asyncio
async def test_when_creating_marker_with_empty_title_then_repository_is_not_called() -> None:
    """Given a blank title, when creating a marker, then validation fails before any request."""
    repository = FakeMarkerRepository()
    session = _session(repository)

    with pytest.raises(ValidationFailure):
        await session.create_marker(MarkerDraft(coordinate=ORIGIN, title="  "))

    assert repository.calls == []


@pytest.mark.asyncio
async def test_when_creating_marker_then_marker_list_is_reloaded() -> None:
    """Given a valid draft, when creating, then the marker is saved and the list refreshed."""
    repository = FakeMarkerRepository()
    session = _session(repository)

    marker = await session.create_marker(MarkerDraft(coordinate=ORIGIN, title="Home"))

    assert repository.calls == ["create", "list"]
    assert session.markers == [marker]


@pytest.mark.asyncio
async def test_when_updating_missing_marker_then_not_found_propagates() -> None:
    """Given an unknown id, when updating, then NotFound reaches the caller."""
    session = _session(FakeMarkerRepository([MONAS]))

    with pytest.raises(NotFound):
        await session.update_marker("missing", MarkerDraft(coordinate=None, title="New"))


@pytest.mark.asyncio
async def test_when_deleting_marker_then_it_disappears_from_session() -> None:
    """Given a loaded marker, when deleting it, then the session no longer lists it."""
    session = _session(FakeMarkerRepository([MONAS]))
    await session.load_markers()

    await session.delete_marker("m1")

    assert session.markers == []


@pytest.mark.asyncio
async def test_when_session_has_no_repository_then_marker_operations_fail() -> None:
    """Given a read-only session, when loading markers, then RuntimeError is raised."""
    with pytest.raises(RuntimeError):
        await _session().load_markers()


@pytest.mark.asyncio
async def test_when_searching_then_loaded_markers_and_pois_are_used() -> None:
    """Given loaded markers and POIs, when searching, then both sources are found."""
    poi = PointOfInterest("node/1", Coordinate(-6.18, 106.83), "Monas Hospital", PoiCategory.HOSPITAL)
    session = _session(FakeMarkerRepository([MONAS]), FakePoiService(pois=[poi]))
    await session.load_markers()
    await session.on_viewport_changed(BoundingBox(-6.3, 106.7, -6.1, 106.9), 12)

    results = session.search("monas")

    assert [r.variant for r in results] == ["marker", "poi"]
    assert session.resolve_marker(results[0]) is MONAS


@pytest.mark.asyncio
async def test_when_session_is_closed_then_state_is_dropped_once() -> None:
    """Given a session with state, when closing twice, then state is cleared and close is idempotent."""
    poi_aggregator = PoiAggregator(FakePoiService(), InMemoryPoiCache())
    session = MapSession(
        RouteOrchestrator(FakeRoutingService(direct=make_route(1, 1))), poi_aggregator
    )
    await session.on_point_selected(ORIGIN)

    with patch.object(poi_aggregator, "clear", wraps=poi_aggregator.clear) as clear:
        session.close()
        session.close()

    assert session.closed
    assert session.selected_points == []
    clear.assert_called_once()
