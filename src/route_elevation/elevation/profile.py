"""Cumulative distance/elevation series built from a routed path."""

from route_elevation.elevation.schemas import ProfileEntry
from route_elevation.exceptions import StateError
from route_elevation.geo import distance, round_half_up
from route_elevation.routing.engine import RoutedPath
from route_elevation.routing.schemas import GeoPoint


def build_profile_entries(points: tuple[GeoPoint, ...] | list[GeoPoint]) -> list[ProfileEntry]:
    """Turn elevation-tagged points into cumulative distance samples.

    The running total keeps full precision; only emitted values are rounded
    to two decimals.

    Raises:
        StateError: If any point has no elevation.
    """
    if not all(point.is_3d for point in points):
        raise StateError(
            "Route points do not contain elevation data. "
            "Ensure elevation is enabled in the route request."
        )
    if not points:
        return []

    entries = [ProfileEntry(distance=0.0, elevation=round_half_up(points[0].elevation, 2))]
    cumulative = 0.0
    for previous, point in zip(points, points[1:]):
        cumulative += distance(
            previous.latitude, previous.longitude, point.latitude, point.longitude
        )
        entries.append(
            ProfileEntry(
                distance=round_half_up(cumulative, 2),
                elevation=round_half_up(point.elevation, 2),
            )
        )
    return entries


def summarize_path(path: RoutedPath) -> tuple[float, float, float]:
    """Return the path's (distance, ascend, descend) rounded for output."""
    return (
        round_half_up(path.distance, 3),
        round_half_up(path.ascend, 2),
        round_half_up(path.descend, 2),
    )
