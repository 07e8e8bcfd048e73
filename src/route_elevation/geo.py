"""Geodesic distance and rounding helpers."""

import math

# Mean earth radius in meters
EARTH_RADIUS_M = 6_371_000.0


def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great-circle distance between two points on Earth.

    Uses the haversine formula on a sphere. Elevation is ignored.

    Args:
        lat1: Latitude of the first point in degrees.
        lon1: Longitude of the first point in degrees.
        lat2: Latitude of the second point in degrees.
        lon2: Longitude of the second point in degrees.

    Returns:
        Distance in meters.
    """
    sin_delta_lat = math.sin(math.radians(lat2 - lat1) / 2)
    sin_delta_lon = math.sin(math.radians(lon2 - lon1) / 2)
    normed = (
        sin_delta_lat * sin_delta_lat
        + sin_delta_lon * sin_delta_lon
        * math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
    )
    return EARTH_RADIUS_M * 2 * math.asin(math.sqrt(normed))


def round_half_up(value: float, decimals: int) -> float:
    """Round ``value`` to ``decimals`` places with ties rounded up.

    Python's built-in ``round`` rounds ties to even, which would make
    ``0.125`` become ``0.12``; this returns ``0.13``.
    """
    factor = 10.0**decimals
    return math.floor(value * factor + 0.5) / factor


def round_millis(value: float) -> int:
    """Round a millisecond duration to the nearest integer, ties up."""
    return int(math.floor(value + 0.5))
