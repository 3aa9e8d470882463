"""Time endpoint router."""

import logging
from datetime import datetime

from fastapi import APIRouter, Request
from fastapi.responses import Response

from ..responses import ALL_HTTP_METHODS, api_compact_json, api_log_trace, api_method_not_allowed


def api_format_rfc3339(moment: datetime) -> str:
    """Format an aware datetime as RFC3339 with second precision, `Z` for UTC."""

    formatted = moment.isoformat(timespec="seconds")
    if formatted.endswith("+00:00"):
        return formatted[: -len("+00:00")] + "Z"
    return formatted


def api_create_clock_router(logger: logging.Logger) -> APIRouter:
    """Create the router exposing the current server time at `/time`.

    Args:
        logger: Application logger.

    Returns:
        APIRouter: Router exposing `/time`.
    """

    handler_name = "api_clock_time"
    logger.info("INITIAL CALL TO %s()", handler_name)
    router = APIRouter(tags=["time"])

    async def api_clock_time(request: Request) -> Response:
        api_log_trace(logger, handler_name, request)
        if request.method != "GET":
            return api_method_not_allowed(request, logger)
        return api_compact_json({"time": api_format_rfc3339(datetime.now().astimezone())})

    router.add_api_route("/time", api_clock_time, methods=ALL_HTTP_METHODS, include_in_schema=False)
    return router
