"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass


def _split_list(value: str) -> tuple[str, ...]:
    """Split a comma-separated value, dropping blank entries."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Application settings populated from environment variables."""

    elevation_enabled: bool
    snap_preventions_default: tuple[str, ...]
    copyrights: tuple[str, ...]
    road_data_timestamp: str | None
    profiles: tuple[str, ...]
    routing_url: str
    routing_timeout_seconds: float
    max_workers: int

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables.

        Returns:
            A frozen Settings instance with values from the environment.
        """
        return cls(
            elevation_enabled=os.getenv("ELEVATION_ENABLED", "true").strip().lower()
            in ("1", "true", "yes"),
            snap_preventions_default=_split_list(os.getenv("SNAP_PREVENTIONS_DEFAULT", "")),
            copyrights=_split_list(
                os.getenv("COPYRIGHTS", "GraphHopper,OpenStreetMap contributors")
            ),
            road_data_timestamp=os.getenv("ROAD_DATA_TIMESTAMP") or None,
            profiles=_split_list(os.getenv("PROFILES", "")),
            routing_url=os.getenv("ROUTING_URL", "http://localhost:8989").rstrip("/"),
            routing_timeout_seconds=float(os.getenv("ROUTING_TIMEOUT_SECONDS", "60")),
            max_workers=int(os.getenv("MAX_WORKERS", "16")),
        )
