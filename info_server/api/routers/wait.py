"""Simulated latency endpoint router."""

import asyncio
import logging

from fastapi import APIRouter, Request
from fastapi.responses import Response

from ..responses import ALL_HTTP_METHODS, api_compact_json, api_log_trace, api_method_not_allowed


def api_create_wait_router(logger: logging.Logger, seconds_to_sleep: int) -> APIRouter:
    """Create the router exposing a fixed-delay response at `/wait`.

    The delay suspends only the request being served; the event loop keeps
    serving other connections meanwhile.

    Args:
        logger: Application logger.
        seconds_to_sleep: Delay applied before each GET response.

    Returns:
        APIRouter: Router exposing `/wait`.

    Raises:
        ValueError: Raised when seconds_to_sleep is negative.
    """

    if seconds_to_sleep < 0:
        raise ValueError("seconds_to_sleep must not be negative")

    handler_name = "api_wait_delay"
    logger.info("INITIAL CALL TO %s()", handler_name)
    router = APIRouter(tags=["wait"])

    async def api_wait_delay(request: Request) -> Response:
        """Wait for the configured delay, then report the waited seconds.

        Returns:
            Response: JSON object `{"waited":"<N> seconds"}` or 405.
        """

        api_log_trace(logger, handler_name, request)
        if request.method != "GET":
            return api_method_not_allowed(request, logger)
        await asyncio.sleep(seconds_to_sleep)
        return api_compact_json({"waited": f"{seconds_to_sleep} seconds"})

    router.add_api_route("/wait", api_wait_delay, methods=ALL_HTTP_METHODS, include_in_schema=False)
    return router
