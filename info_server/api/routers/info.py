"""Root endpoint router reporting the runtime snapshot."""

import dataclasses
import logging
from datetime import datetime

from fastapi import APIRouter, Request
from fastapi.responses import Response

from info_server.config import AppSettings
from info_server.domain import domain_collect_request_headers, domain_collect_runtime_info

from ..responses import (
    ALL_HTTP_METHODS,
    api_log_trace,
    api_method_not_allowed,
    api_not_found_page,
    api_remote_address,
    api_render_json,
)

DEFAULT_SERVER_PATH = "/"


def api_create_info_router(settings: AppSettings, logger: logging.Logger, start_time: datetime) -> APIRouter:
    """Create the router serving the runtime snapshot at `/`.

    The router also binds a catch-all path so every unknown path reaches the
    root handler, which answers GET with the decorative 404 page. It must be
    included after all other routers.

    Args:
        settings: Validated application settings.
        logger: Application logger.
        start_time: Server start timestamp used for the static uptime value.

    Returns:
        APIRouter: Router exposing `/` and the catch-all path.
    """

    handler_name = "api_info_snapshot"
    logger.info("INITIAL CALL TO %s()", handler_name)
    static_snapshot = domain_collect_runtime_info(settings=settings, start_time=start_time, logger=logger)

    router = APIRouter(tags=["info"])

    async def api_info_snapshot(request: Request) -> Response:
        """Return the runtime snapshot for GET on the exact root path.

        Returns:
            Response: JSON snapshot, 404 page for other paths or 405 for
            non-GET methods.
        """

        remote_address = api_remote_address(request)
        requested_path = request.url.path
        api_log_trace(logger, handler_name, request)

        if request.method != "GET":
            return api_method_not_allowed(request, logger)

        if requested_path.strip() and requested_path != DEFAULT_SERVER_PATH:
            return api_not_found_page()

        # TODO: uptime is blanked before every response, so callers never see it;
        # report the time elapsed since start_time instead.
        snapshot = dataclasses.replace(
            static_snapshot,
            param_name=next(iter(request.query_params.getlist("name")), "") or static_snapshot.param_name,
            remote_addr=remote_address,
            headers=domain_collect_request_headers(request.headers.raw),
            uptime="",
        )
        response = api_render_json(snapshot, logger)
        logger.info("SUCCESS: [%s] path:'%s', from IP: [%s]", handler_name, requested_path, remote_address)
        return response

    router.add_api_route(DEFAULT_SERVER_PATH, api_info_snapshot, methods=ALL_HTTP_METHODS, include_in_schema=False)
    router.add_api_route(
        "/{unknown_path:path}",
        api_info_snapshot,
        methods=ALL_HTTP_METHODS,
        include_in_schema=False,
    )
    return router
