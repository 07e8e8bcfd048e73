"""Shared test fixtures."""

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest

from route_elevation.config import Settings
from route_elevation.elevation.service import ElevationProfileService
from route_elevation.routing.client import HttpRoutingEngine
from route_elevation.routing.engine import RoutedPath, RoutingResponse
from route_elevation.routing.schemas import GeoPoint

# Two waypoints in Monaco and the path an engine would return between them.
MONACO_A = (43.730864, 7.420771)
MONACO_B = (43.727687, 7.418737)
MONACO_PATH = RoutedPath(
    points=(
        GeoPoint(latitude=43.730864, longitude=7.420771, elevation=60.124),
        GeoPoint(latitude=43.729500, longitude=7.419900, elevation=55.5),
        GeoPoint(latitude=43.728300, longitude=7.419200, elevation=48.0),
        GeoPoint(latitude=43.727687, longitude=7.418737, elevation=44.875),
    ),
    distance=389.4872,
    ascend=1.234,
    descend=17.125,
)


@pytest.fixture
def settings() -> Settings:
    """Create test settings with elevation enabled."""
    return Settings(
        elevation_enabled=True,
        snap_preventions_default=("ferry", "tunnel"),
        copyrights=("GraphHopper", "OpenStreetMap contributors"),
        road_data_timestamp="2024-01-01T00:00:00Z",
        profiles=("profile", "bike"),
        routing_url="http://routing.test",
        routing_timeout_seconds=5.0,
        max_workers=2,
    )


@pytest.fixture
def engine() -> MagicMock:
    """Create a mock routing engine returning the Monaco path."""
    mock = MagicMock(spec=HttpRoutingEngine)
    mock.route.return_value = RoutingResponse(best=MONACO_PATH)
    return mock


@pytest.fixture
def service(
    settings: Settings, engine: MagicMock
) -> Generator[ElevationProfileService, None, None]:
    """Create an ElevationProfileService wired to the mock engine."""
    profile_service = ElevationProfileService(settings, engine)
    yield profile_service
    profile_service.shutdown()


@pytest.fixture
def monaco_path() -> RoutedPath:
    """The elevation-tagged path the mock engine returns."""
    return MONACO_PATH
