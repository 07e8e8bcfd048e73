"""FastAPI application entry point."""

import dataclasses
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from route_elevation.config import Settings
from route_elevation.elevation.routes import router
from route_elevation.elevation.service import ElevationProfileService
from route_elevation.exceptions import RoutingEngineUnavailableError
from route_elevation.routing.client import HttpRoutingEngine

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def complete_settings(settings: Settings, engine: HttpRoutingEngine) -> Settings:
    """Fill in the data date and profile names the engine knows about.

    Values set in the environment are kept. If the engine cannot be asked,
    the settings are returned unchanged.
    """
    if settings.road_data_timestamp and settings.profiles:
        return settings
    try:
        info = engine.fetch_info()
    except RoutingEngineUnavailableError as exc:
        logger.warning("Could not read routing engine info", extra={"error": str(exc)})
        return settings
    return dataclasses.replace(
        settings,
        road_data_timestamp=settings.road_data_timestamp or info.data_date,
        profiles=settings.profiles or info.profiles,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown.

    Connects to the routing engine on startup and shuts down the thread
    pool executor and HTTP session on teardown.
    """
    settings = Settings.from_env()
    engine = HttpRoutingEngine(settings.routing_url, timeout=settings.routing_timeout_seconds)
    settings = complete_settings(settings, engine)
    service = ElevationProfileService(settings, engine)
    app.state.profile_service = service
    logger.info(
        "Elevation profile service initialized",
        extra={"routing_url": settings.routing_url, "elevation_enabled": settings.elevation_enabled},
    )
    yield
    service.shutdown()
    engine.close()
    logger.info("Elevation profile service shut down")


app = FastAPI(title="Route Elevation API", lifespan=lifespan)
app.include_router(router)
