"""Schemas for elevation profile requests and responses."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from pydantic import BaseModel

from route_elevation.routing.schemas import GeoPoint

DEFAULT_WAY_POINT_MAX_DISTANCE = 0.5


@dataclass(frozen=True, slots=True)
class ElevationQuery:
    """Typed parameters extracted from a GET elevation request.

    ``snap_preventions`` is ``None`` when the parameter was absent from the
    query string. ``raw`` holds every query parameter with all its values,
    used to copy generic routing hints.
    """

    points: list[GeoPoint]
    profile: str = ""
    algorithm: str = ""
    locale: str = "en"
    headings: list[float] = field(default_factory=list)
    point_hints: list[str] = field(default_factory=list)
    curbsides: list[str] = field(default_factory=list)
    snap_preventions: list[str] | None = None
    path_details: list[str] = field(default_factory=list)
    way_point_max_distance: float = DEFAULT_WAY_POINT_MAX_DISTANCE
    elevation_way_point_max_distance: float | None = None
    raw: Mapping[str, Sequence[str]] = field(default_factory=dict)


class ProfileEntry(BaseModel):
    """One sample of the elevation profile."""

    distance: float
    elevation: float


class ResponseInfo(BaseModel):
    """Metadata attached to every successful response."""

    copyrights: list[str]
    took: int
    road_data_timestamp: str | None = None


class ElevationProfileResponse(BaseModel):
    """Response schema for the route elevation endpoint."""

    profile: list[ProfileEntry]
    distance: float
    ascend: float
    descend: float
    info: ResponseInfo
