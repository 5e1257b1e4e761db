"""Shared fixtures."""

from collections.abc import Iterator

import pytest

from map_route_planner.adapters.api_rate_limiter import ApiRateLimiter


@pytest.fixture(autouse=True)
def reset_rate_limiters() -> Iterator[None]:
    """Shared limiters hold locks bound to one event loop; start each test fresh."""
    ApiRateLimiter.reset()
    yield
    ApiRateLimiter.reset()
