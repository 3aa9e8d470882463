"""Readiness and health probe routers for orchestration tooling."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import Response

from ..responses import ALL_HTTP_METHODS, api_log_trace, api_method_not_allowed


def api_create_readiness_router(logger: logging.Logger) -> APIRouter:
    """Create the router exposing the `/readiness` probe.

    No dependency is checked; a GET always answers 200 with an empty body.

    Args:
        logger: Application logger.

    Returns:
        APIRouter: Router exposing `/readiness`.
    """

    handler_name = "api_readiness_probe"
    logger.info("INITIAL CALL TO %s()", handler_name)
    router = APIRouter(tags=["probes"])

    async def api_readiness_probe(request: Request) -> Response:
        api_log_trace(logger, handler_name, request)
        if request.method != "GET":
            return api_method_not_allowed(request, logger)
        return Response(status_code=status.HTTP_200_OK)

    router.add_api_route("/readiness", api_readiness_probe, methods=ALL_HTTP_METHODS, include_in_schema=False)
    return router


def api_create_health_router(logger: logging.Logger) -> APIRouter:
    """Create the router exposing the `/health` probe.

    Kept separate from readiness so liveness and readiness probes can be
    pointed at distinct endpoints.

    Args:
        logger: Application logger.

    Returns:
        APIRouter: Router exposing `/health`.
    """

    handler_name = "api_health_probe"
    logger.info("INITIAL CALL TO %s()", handler_name)
    router = APIRouter(tags=["probes"])

    async def api_health_probe(request: Request) -> Response:
        api_log_trace(logger, handler_name, request)
        if request.method != "GET":
            return api_method_not_allowed(request, logger)
        return Response(status_code=status.HTTP_200_OK)

    router.add_api_route("/health", api_health_probe, methods=ALL_HTTP_METHODS, include_in_schema=False)
    return router
