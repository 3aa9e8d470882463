"""FastAPI application factory binding the routing table."""

import logging
from datetime import datetime

from fastapi import FastAPI

from info_server.config import AppSettings

from .routers import (
    api_create_clock_router,
    api_create_health_router,
    api_create_info_router,
    api_create_readiness_router,
    api_create_wait_router,
)


def create_api_application(settings: AppSettings, logger: logging.Logger, start_time: datetime) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Routes are matched on exact paths. The root router carries the catch-all
    path and is therefore included last.

    Args:
        settings: Validated application settings.
        logger: Application logger shared by all handlers.
        start_time: Timezone-aware server start timestamp.

    Returns:
        FastAPI: Application with the complete routing table.
    """

    application = FastAPI(
        title=settings.application_name,
        version=settings.application_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )

    application.include_router(api_create_clock_router(logger=logger))
    application.include_router(api_create_wait_router(logger=logger, seconds_to_sleep=settings.wait_seconds))
    application.include_router(api_create_readiness_router(logger=logger))
    application.include_router(api_create_health_router(logger=logger))
    application.include_router(api_create_info_router(settings=settings, logger=logger, start_time=start_time))

    return application
