"""Tests for routing collaborator contracts."""

import pytest

from route_elevation.exceptions import ValidationError
from route_elevation.routing.engine import (
    ProfileResolver,
    RoutedPath,
    RoutingResponse,
    identity_transformer,
)
from route_elevation.routing.schemas import GeoPoint, RoutingRequest


class TestProfileResolver:
    def test_returns_known_profile(self) -> None:
        resolver = ProfileResolver(("car", "bike"))

        assert resolver.resolve_profile({"profile": "bike", "has_curbsides": False}) == "bike"

    def test_accepts_any_profile_without_configured_list(self) -> None:
        resolver = ProfileResolver()

        assert resolver.resolve_profile({"profile": "foot"}) == "foot"

    def test_rejects_empty_profile(self) -> None:
        resolver = ProfileResolver(("car",))

        with pytest.raises(ValidationError, match="'profile' parameter is required"):
            resolver.resolve_profile({"profile": "", "has_curbsides": True})

    def test_rejects_unknown_profile_listing_available(self) -> None:
        resolver = ProfileResolver(("car", "bike"))

        with pytest.raises(ValidationError, match=r"Available profiles: \['car', 'bike'\]"):
            resolver.resolve_profile({"profile": "truck"})


class TestRoutingResponse:
    def test_has_errors(self) -> None:
        assert RoutingResponse(errors=("Point 0 is out of bounds",)).has_errors
        assert not RoutingResponse().has_errors

    def test_path_dimension(self) -> None:
        flat = RoutedPath(
            points=(GeoPoint(latitude=1.0, longitude=1.0),),
            distance=0.0,
            ascend=0.0,
            descend=0.0,
        )
        tagged = RoutedPath(
            points=(GeoPoint(latitude=1.0, longitude=1.0, elevation=3.0),),
            distance=0.0,
            ascend=0.0,
            descend=0.0,
        )

        assert not flat.is_3d
        assert tagged.is_3d


def test_identity_transformer_returns_same_request() -> None:
    request = RoutingRequest(profile="car")

    assert identity_transformer(request) is request
