"""Pure helpers turning raw client input into canonical routing requests."""

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from route_elevation.config import Settings
from route_elevation.elevation.schemas import DEFAULT_WAY_POINT_MAX_DISTANCE, ElevationQuery
from route_elevation.routing.schemas import RoutingRequest

CALC_POINTS = "calc_points"
INSTRUCTIONS = "instructions"
ELEVATION = "elevation"
WAY_POINT_MAX_DISTANCE = "way_point_max_distance"
ELEVATION_WAY_POINT_MAX_DISTANCE = "elevation_way_point_max_distance"

# Parameters with a dedicated RoutingRequest field are never copied into hints.
STRUCTURED_QUERY_PARAMS = frozenset(
    {
        "point",
        "profile",
        "algorithm",
        "locale",
        "heading",
        "point_hint",
        "curbside",
        "snap_prevention",
        "path_details",
    }
)

# Request fields the routing engine expects as lists or objects; a query
# parameter with one of these names must not shadow them as a scalar hint.
RESERVED_HINT_KEYS = frozenset(
    {"points", "details", "headings", "point_hints", "curbsides", "snap_preventions", "custom_model"}
)

LEGACY_HINTS = ("vehicle", "weighting", "edge_based", "turn_costs")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")
_INTEGER = re.compile(r"[+-]?\d+")


def camel_to_snake(key: str) -> str:
    """Convert ``wayPointMaxDistance`` style keys to ``way_point_max_distance``."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def parse_hint_value(value: str) -> Any:
    """Coerce a query string value to bool, int or float where it looks like one.

    Non-finite literals such as ``inf`` or ``nan`` stay strings; they cannot
    be sent on as JSON numbers.
    """
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if _INTEGER.fullmatch(value):
        return int(value)
    try:
        number = float(value)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


def hints_from_query(params: Mapping[str, Sequence[str]]) -> dict[str, Any]:
    """Copy generic routing hints from raw query parameters.

    Only parameters given exactly once are copied; structured parameters
    are handled by dedicated request fields instead.
    """
    hints: dict[str, Any] = {}
    for key, values in params.items():
        if key in STRUCTURED_QUERY_PARAMS or len(values) != 1:
            continue
        hint_key = camel_to_snake(key)
        if hint_key in RESERVED_HINT_KEYS:
            continue
        hints[hint_key] = parse_hint_value(values[0])
    return hints


def resolve_snap_preventions(
    values: Sequence[str] | None, default: Sequence[str]
) -> list[str]:
    """Pick the snap preventions for a query.

    An absent parameter falls back to ``default``. A single empty string is
    an explicit request for no snap preventions at all.
    """
    if values is None:
        return list(default)
    if len(values) == 1 and values[0] == "":
        return []
    return list(values)


def with_elevation_hints(hints: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``hints`` with points and elevation on, instructions off."""
    return {**hints, CALC_POINTS: True, INSTRUCTIONS: False, ELEVATION: True}


def build_request_from_query(query: ElevationQuery, settings: Settings) -> RoutingRequest:
    """Build the canonical routing request for a GET call."""
    hints = hints_from_query(query.raw)
    if query.elevation_way_point_max_distance is not None:
        hints[ELEVATION_WAY_POINT_MAX_DISTANCE] = query.elevation_way_point_max_distance
    hints = with_elevation_hints(hints)
    hints[WAY_POINT_MAX_DISTANCE] = query.way_point_max_distance

    return RoutingRequest(
        points=list(query.points),
        profile=query.profile,
        algorithm=query.algorithm,
        locale=query.locale,
        headings=list(query.headings),
        point_hints=list(query.point_hints),
        curbsides=list(query.curbsides),
        snap_preventions=resolve_snap_preventions(
            query.snap_preventions, settings.snap_preventions_default
        ),
        path_details=list(query.path_details),
        hints=hints,
    )


def normalize_body_request(request: RoutingRequest, settings: Settings) -> RoutingRequest:
    """Apply defaults and elevation invariants to a POST body request."""
    update: dict[str, Any] = {}
    if not request.has_snap_preventions:
        update["snap_preventions"] = list(settings.snap_preventions_default)
    hints = with_elevation_hints(request.hints)
    hints.setdefault(WAY_POINT_MAX_DISTANCE, DEFAULT_WAY_POINT_MAX_DISTANCE)
    update["hints"] = hints
    return request.model_copy(update=update)


def profile_resolver_hints(request: RoutingRequest) -> dict[str, Any]:
    """Derive the hints a profile resolver decides on."""
    return {
        **request.hints,
        "profile": request.profile,
        "has_curbsides": bool(request.curbsides),
    }


def remove_legacy_hints(hints: Mapping[str, Any]) -> dict[str, Any]:
    """Drop hints superseded by profiles."""
    return {key: value for key, value in hints.items() if key not in LEGACY_HINTS}


def apply_resolved_profile(request: RoutingRequest, profile: str) -> RoutingRequest:
    """Set the resolved profile and strip legacy hints."""
    return request.model_copy(
        update={"profile": profile, "hints": remove_legacy_hints(request.hints)}
    )
