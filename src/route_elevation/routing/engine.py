"""Contracts of the routing collaborators used by the elevation service."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from route_elevation.exceptions import ValidationError
from route_elevation.routing.schemas import GeoPoint, RoutingRequest


@dataclass(frozen=True, slots=True)
class RoutedPath:
    """Best path returned by the routing engine. Distances are in meters."""

    points: tuple[GeoPoint, ...]
    distance: float
    ascend: float
    descend: float

    @property
    def is_3d(self) -> bool:
        return all(point.is_3d for point in self.points)


@dataclass(frozen=True, slots=True)
class RoutingResponse:
    """Outcome of a routing call: either errors or an optional best path."""

    errors: tuple[str, ...] = ()
    best: RoutedPath | None = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


@dataclass(frozen=True, slots=True)
class EngineInfo:
    """Metadata reported by a routing engine about its loaded graph."""

    profiles: tuple[str, ...] = ()
    data_date: str | None = None


class RoutingEngine(Protocol):
    """Anything able to route a canonical request."""

    def route(self, request: RoutingRequest) -> RoutingResponse: ...


RequestTransformer = Callable[[RoutingRequest], RoutingRequest]


def identity_transformer(request: RoutingRequest) -> RoutingRequest:
    """Default request transformer: returns the request unchanged."""
    return request


class ProfileResolver:
    """Resolves the profile name a request should be routed with.

    When ``profiles`` is empty any non-empty name is accepted and validation
    is left to the routing engine.
    """

    def __init__(self, profiles: tuple[str, ...] = ()) -> None:
        self._profiles = profiles

    def resolve_profile(self, hints: Mapping[str, Any]) -> str:
        """Pick the profile name from resolver hints.

        Args:
            hints: Request hints including the ``profile`` and ``has_curbsides`` keys.

        Returns:
            The resolved profile name.

        Raises:
            ValidationError: If no profile was given or the profile is unknown.
        """
        profile = str(hints.get("profile") or "")
        if not profile:
            raise ValidationError(self._with_available("The 'profile' parameter is required."))
        if self._profiles and profile not in self._profiles:
            raise ValidationError(
                self._with_available(f"The requested profile '{profile}' does not exist.")
            )
        return profile

    def _with_available(self, message: str) -> str:
        if not self._profiles:
            return message
        return f"{message} Available profiles: {list(self._profiles)}"
