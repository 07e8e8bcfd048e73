"""Elevation profile service: normalizes requests, routes them and builds profiles."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

from route_elevation.config import Settings
from route_elevation.elevation.normalization import (
    apply_resolved_profile,
    build_request_from_query,
    normalize_body_request,
    profile_resolver_hints,
    with_elevation_hints,
)
from route_elevation.elevation.profile import build_profile_entries, summarize_path
from route_elevation.elevation.schemas import (
    ElevationProfileResponse,
    ElevationQuery,
    ResponseInfo,
)
from route_elevation.exceptions import (
    ConfigurationError,
    NotFoundError,
    RoutingError,
    ValidationError,
)
from route_elevation.geo import round_millis
from route_elevation.routing.engine import (
    ProfileResolver,
    RequestTransformer,
    RoutedPath,
    RoutingEngine,
    identity_transformer,
)
from route_elevation.routing.schemas import RoutingRequest

logger = logging.getLogger(__name__)


class ElevationProfileService:
    """Service computing elevation profiles along routes.

    Requests from both entry points (query parameters or a JSON body) are
    normalized into the same elevation-enabled routing request, handed to
    the routing engine, and the best path is turned into a cumulative
    distance/elevation series. The engine call blocks, so route handlers
    run service calls on ``executor``.
    """

    def __init__(
        self,
        settings: Settings,
        engine: RoutingEngine,
        *,
        resolver: ProfileResolver | None = None,
        transformer: RequestTransformer = identity_transformer,
    ) -> None:
        self._settings = settings
        self._engine = engine
        self._resolver = resolver or ProfileResolver(settings.profiles)
        self._transformer = transformer
        self._executor = ThreadPoolExecutor(max_workers=settings.max_workers)

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Thread pool executor for running blocking routing calls in async contexts."""
        return self._executor

    def profile_from_query(self, query: ElevationQuery) -> ElevationProfileResponse:
        """Compute an elevation profile for GET query parameters.

        Args:
            query: Parameters extracted from the query string.

        Returns:
            The elevation profile response.

        Raises:
            ConfigurationError: If elevation is disabled for this deployment.
            ValidationError: If the profile cannot be resolved.
            RoutingError: If the routing engine reports errors.
            NotFoundError: If no route was found.
            StateError: If the routed path carries no elevation.
        """
        self._ensure_elevation_enabled()
        started = time.perf_counter()
        request = self._transformer(build_request_from_query(query, self._settings))
        return self._route(request, started)

    def profile_from_body(self, request: RoutingRequest) -> ElevationProfileResponse:
        """Compute an elevation profile for a POST routing request body.

        Args:
            request: The routing request as sent by the client.

        Returns:
            The elevation profile response.

        Raises:
            ConfigurationError: If elevation is disabled for this deployment.
            ValidationError: If a custom model is sent without a profile, or
                the profile cannot be resolved.
            RoutingError: If the routing engine reports errors.
            NotFoundError: If no route was found.
            StateError: If the routed path carries no elevation.
        """
        self._ensure_elevation_enabled()
        started = time.perf_counter()
        request = self._transformer(normalize_body_request(request, self._settings))
        return self._route(request, started)

    def _ensure_elevation_enabled(self) -> None:
        if not self._settings.elevation_enabled:
            raise ConfigurationError(
                "Elevation not supported! Please enable elevation for this deployment."
            )

    def _route(self, request: RoutingRequest, started: float) -> ElevationProfileResponse:
        if not request.profile and request.custom_model is not None:
            raise ValidationError(
                "The 'profile' parameter is required when you use the 'custom_model' parameter"
            )

        profile = self._resolver.resolve_profile(profile_resolver_hints(request))
        request = apply_resolved_profile(request, profile)
        # The transformer may have rewritten hints; the elevation invariants win.
        request = request.model_copy(update={"hints": with_elevation_hints(request.hints)})

        response = self._engine.route(request)
        took = (time.perf_counter() - started) * 1000

        log_context = {
            "points": len(request.points),
            "took_ms": round(took, 1),
            "algorithm": request.algorithm,
            "profile": request.profile,
            "custom_model": request.custom_model is not None,
        }

        if response.has_errors:
            logger.info(
                "Routing engine reported errors",
                extra={**log_context, "errors": list(response.errors)},
            )
            raise RoutingError(list(response.errors))

        best = response.best
        if best is None or not best.points:
            logger.warning("No route found", extra=log_context)
            raise NotFoundError()

        result = self._build_response(best, took)
        logger.info(
            "Routed elevation request",
            extra={**log_context, "distance": best.distance, "path_points": len(best.points)},
        )
        return result

    def _build_response(self, path: RoutedPath, took: float) -> ElevationProfileResponse:
        entries = build_profile_entries(path.points)
        distance, ascend, descend = summarize_path(path)
        return ElevationProfileResponse(
            profile=entries,
            distance=distance,
            ascend=ascend,
            descend=descend,
            info=ResponseInfo(
                copyrights=list(self._settings.copyrights),
                took=round_millis(took),
                road_data_timestamp=self._settings.road_data_timestamp,
            ),
        )

    def shutdown(self) -> None:
        """Shut down the thread pool executor."""
        self._executor.shutdown(wait=False)
