"""Tests for settings loading and startup wiring."""

from unittest.mock import MagicMock

import pytest

from route_elevation.config import Settings
from route_elevation.exceptions import RoutingEngineUnavailableError
from route_elevation.main import complete_settings
from route_elevation.routing.client import HttpRoutingEngine
from route_elevation.routing.engine import EngineInfo


class TestFromEnv:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "ELEVATION_ENABLED",
            "SNAP_PREVENTIONS_DEFAULT",
            "COPYRIGHTS",
            "ROAD_DATA_TIMESTAMP",
            "PROFILES",
            "ROUTING_URL",
            "ROUTING_TIMEOUT_SECONDS",
            "MAX_WORKERS",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.elevation_enabled is True
        assert settings.snap_preventions_default == ()
        assert settings.copyrights == ("GraphHopper", "OpenStreetMap contributors")
        assert settings.road_data_timestamp is None
        assert settings.routing_url == "http://localhost:8989"
        assert settings.max_workers == 16

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ELEVATION_ENABLED", "false")
        monkeypatch.setenv("SNAP_PREVENTIONS_DEFAULT", " tunnel, ,bridge,ferry ")
        monkeypatch.setenv("PROFILES", "car,bike")
        monkeypatch.setenv("ROUTING_URL", "http://engine:8989/")
        monkeypatch.setenv("ROUTING_TIMEOUT_SECONDS", "2.5")

        settings = Settings.from_env()

        assert settings.elevation_enabled is False
        assert settings.snap_preventions_default == ("tunnel", "bridge", "ferry")
        assert settings.profiles == ("car", "bike")
        assert settings.routing_url == "http://engine:8989"
        assert settings.routing_timeout_seconds == 2.5


class TestCompleteSettings:
    def test_fills_missing_values_from_engine(self, settings: Settings) -> None:
        engine = MagicMock(spec=HttpRoutingEngine)
        engine.fetch_info.return_value = EngineInfo(profiles=("car",), data_date="2024-05-01")
        bare = Settings(
            elevation_enabled=True,
            snap_preventions_default=(),
            copyrights=(),
            road_data_timestamp=None,
            profiles=(),
            routing_url=settings.routing_url,
            routing_timeout_seconds=1.0,
            max_workers=1,
        )

        completed = complete_settings(bare, engine)

        assert completed.road_data_timestamp == "2024-05-01"
        assert completed.profiles == ("car",)

    def test_keeps_configured_values(self, settings: Settings) -> None:
        engine = MagicMock(spec=HttpRoutingEngine)

        assert complete_settings(settings, engine) is settings
        engine.fetch_info.assert_not_called()

    def test_survives_unreachable_engine(self, settings: Settings) -> None:
        engine = MagicMock(spec=HttpRoutingEngine)
        engine.fetch_info.side_effect = RoutingEngineUnavailableError("down")
        bare = Settings(
            elevation_enabled=True,
            snap_preventions_default=(),
            copyrights=(),
            road_data_timestamp=None,
            profiles=(),
            routing_url=settings.routing_url,
            routing_timeout_seconds=1.0,
            max_workers=1,
        )

        assert complete_settings(bare, engine) == bare
