"""Tests for elevation profile schemas."""

import pytest
from pydantic import ValidationError

from route_elevation.elevation.schemas import (
    ElevationProfileResponse,
    ElevationQuery,
    ProfileEntry,
    ResponseInfo,
)
from route_elevation.routing.schemas import GeoPoint


class TestProfileEntry:
    def test_negative_elevation(self) -> None:
        entry = ProfileEntry(distance=12.5, elevation=-430.0)

        assert entry.elevation == -430.0

    def test_rejects_missing_fields(self) -> None:
        with pytest.raises(ValidationError):
            ProfileEntry(distance=1.0)  # type: ignore[call-arg]


class TestElevationProfileResponse:
    def test_dump_excludes_unknown_timestamp(self) -> None:
        response = ElevationProfileResponse(
            profile=[ProfileEntry(distance=0.0, elevation=10.0)],
            distance=0.0,
            ascend=0.0,
            descend=0.0,
            info=ResponseInfo(copyrights=["OpenStreetMap contributors"], took=3),
        )

        body = response.model_dump(exclude_none=True)

        assert set(body) == {"profile", "distance", "ascend", "descend", "info"}
        assert body["info"] == {"copyrights": ["OpenStreetMap contributors"], "took": 3}

    def test_keeps_known_timestamp(self) -> None:
        info = ResponseInfo(copyrights=[], took=0, road_data_timestamp="2024-01-01T00:00:00Z")

        assert info.model_dump(exclude_none=True)["road_data_timestamp"] == "2024-01-01T00:00:00Z"


class TestElevationQuery:
    def test_defaults(self) -> None:
        query = ElevationQuery(points=[GeoPoint(latitude=1.0, longitude=2.0)])

        assert query.profile == ""
        assert query.algorithm == ""
        assert query.locale == "en"
        assert query.headings == []
        assert query.snap_preventions is None
        assert query.way_point_max_distance == 0.5
        assert query.elevation_way_point_max_distance is None
        assert query.raw == {}
