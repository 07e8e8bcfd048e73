"""API routes for route elevation profiles."""

import asyncio
import logging
from collections.abc import Callable
from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from route_elevation.elevation.schemas import (
    DEFAULT_WAY_POINT_MAX_DISTANCE,
    ElevationProfileResponse,
    ElevationQuery,
)
from route_elevation.elevation.service import ElevationProfileService
from route_elevation.exceptions import (
    ConfigurationError,
    InvalidCoordinateError,
    NotFoundError,
    RoutingEngineUnavailableError,
    RoutingError,
    StateError,
    ValidationError,
)
from route_elevation.routing.schemas import GeoPoint, RoutingRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/route", tags=["elevation"])

TOOK_HEADER = "X-GH-Took"

T = TypeVar("T")


def get_profile_service(request: Request) -> ElevationProfileService:
    """FastAPI dependency that retrieves the ElevationProfileService from app state."""
    service: ElevationProfileService = request.app.state.profile_service
    return service


async def _compute(
    service: ElevationProfileService,
    func: Callable[[T], ElevationProfileResponse],
    arg: T,
    response: Response,
) -> ElevationProfileResponse:
    """Run a blocking service call on the executor and map errors to HTTP statuses."""
    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(service.executor, func, arg)
    except (ConfigurationError, ValidationError) as exc:
        logger.warning("Rejected elevation request", extra={"error": str(exc), "code": exc.code})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except RoutingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": str(exc),
                "hints": [{"message": message} for message in exc.errors],
            },
        ) from exc
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except StateError as exc:
        logger.error("Routed path lacks elevation", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    except RoutingEngineUnavailableError as exc:
        logger.error("Routing engine unavailable", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc

    response.headers[TOOK_HEADER] = str(result.info.took)
    return result


@router.get(
    "/elevation",
    response_model=ElevationProfileResponse,
    response_model_exclude_none=True,
    summary="Elevation profile along a route",
)
async def elevation_profile(
    request: Request,
    response: Response,
    service: Annotated[ElevationProfileService, Depends(get_profile_service)],
    point: Annotated[list[str], Query(...)],
    profile: Annotated[str, Query()] = "",
    algorithm: Annotated[str, Query()] = "",
    locale: Annotated[str, Query()] = "en",
    heading: Annotated[list[float], Query()] = [],
    point_hint: Annotated[list[str], Query()] = [],
    curbside: Annotated[list[str], Query()] = [],
    snap_prevention: Annotated[list[str] | None, Query()] = None,
    path_details: Annotated[list[str], Query()] = [],
    way_point_max_distance: Annotated[float, Query()] = DEFAULT_WAY_POINT_MAX_DISTANCE,
    elevation_way_point_max_distance: Annotated[float | None, Query()] = None,
) -> ElevationProfileResponse:
    """Compute the elevation profile of the route through the given points.

    Args:
        point: Waypoints in 'lat,lon' format, in travel order.
        snap_prevention: Road categories waypoints must not snap to. Pass a
            single empty value to disable the configured default.

    Returns:
        The cumulative distance/elevation profile with ascend and descend.
    """
    try:
        points = [GeoPoint.parse(location) for location in point]
    except InvalidCoordinateError as exc:
        logger.warning("Rejected elevation request", extra={"error": str(exc), "code": exc.code})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    query = ElevationQuery(
        points=points,
        profile=profile,
        algorithm=algorithm,
        locale=locale,
        headings=heading,
        point_hints=point_hint,
        curbsides=curbside,
        snap_preventions=snap_prevention,
        path_details=path_details,
        way_point_max_distance=way_point_max_distance,
        elevation_way_point_max_distance=elevation_way_point_max_distance,
        raw={key: request.query_params.getlist(key) for key in request.query_params.keys()},
    )
    return await _compute(service, service.profile_from_query, query, response)


@router.post(
    "/elevation",
    response_model=ElevationProfileResponse,
    response_model_exclude_none=True,
    summary="Elevation profile for a routing request body",
)
async def elevation_profile_from_body(
    body: RoutingRequest,
    response: Response,
    service: Annotated[ElevationProfileService, Depends(get_profile_service)],
) -> ElevationProfileResponse:
    """Compute the elevation profile for a JSON routing request."""
    return await _compute(service, service.profile_from_body, body, response)
