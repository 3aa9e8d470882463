"""Response rendering shared by all endpoint handlers."""

import dataclasses
import json
import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

MIME_APP_JSON_CHARSET_UTF8 = "application/json; charset=UTF-8"
HEADER_CONTENT_TYPE_OPTIONS = "X-Content-Type-Options"
HTTP_ERR_METHOD_NOT_ALLOWED = "ERROR: Http method not allowed"
DEFAULT_NOT_FOUND = "🤔 ℍ𝕞𝕞... 𝕤𝕠𝕣𝕣𝕪 :【𝟜𝟘𝟜 : ℙ𝕒𝕘𝕖 ℕ𝕠𝕥 𝔽𝕠𝕦𝕟𝕕】🕳️ 🔥"
HTML_HEADER_START = (
    '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8">'
    '<meta name="viewport" content="width=device-width, initial-scale=1">'
    '<link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/skeleton/2.0.4/skeleton.min.css"/>'
)

# Every handler checks the method itself, so routes accept all of them.
ALL_HTTP_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


def api_render_json(payload: Any, logger: logging.Logger) -> Response:
    """Serialize a payload into a pretty-printed JSON response.

    Args:
        payload: JSON-serializable value or dataclass instance.
        logger: Logger receiving serialization failures.

    Returns:
        Response: HTTP 200 with the indented JSON body, or HTTP 500 with an
        empty body when the payload cannot be serialized.
    """

    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        payload = dataclasses.asdict(payload)
    try:
        body = json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as error:
        logger.error("ERROR: 'JSON marshal failed. Error: %s'", error)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(
        content=body,
        status_code=status.HTTP_200_OK,
        media_type=MIME_APP_JSON_CHARSET_UTF8,
        headers={HEADER_CONTENT_TYPE_OPTIONS: "nosniff"},
    )


def api_compact_json(payload: dict[str, str]) -> Response:
    """Return a minimal single-line JSON object with the JSON content type."""

    return Response(
        content=json.dumps(payload, separators=(",", ":"), ensure_ascii=False),
        status_code=status.HTTP_200_OK,
        media_type=MIME_APP_JSON_CHARSET_UTF8,
    )


def api_method_not_allowed(request: Request, logger: logging.Logger) -> PlainTextResponse:
    """Reject a request whose method the handler does not serve.

    Args:
        request: Rejected inbound request.
        logger: Logger receiving the rejection line.

    Returns:
        PlainTextResponse: HTTP 405 carrying the fixed error text.
    """

    logger.info("%s. Request: %s %s", HTTP_ERR_METHOD_NOT_ALLOWED, request.method, request.url)
    return PlainTextResponse(
        content=f"{HTTP_ERR_METHOD_NOT_ALLOWED}\n",
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        headers={HEADER_CONTENT_TYPE_OPTIONS: "nosniff"},
    )


def api_html_page(title: str) -> str:
    """Build a minimal HTML page using `title` for the title and heading."""

    return (
        f"{HTML_HEADER_START}<title>{title}</title></head>"
        f'\n<body><div class="container"><h3>{title}</h3></div></body></html>'
    )


def api_not_found_page() -> HTMLResponse:
    """Return the fixed decorative 404 page."""

    return HTMLResponse(content=api_html_page(DEFAULT_NOT_FOUND), status_code=status.HTTP_404_NOT_FOUND)


def api_log_trace(logger: logging.Logger, handler_name: str, request: Request) -> None:
    """Log the per-request trace line written by every handler."""

    logger.info(
        "TRACE: [%s] %s  path:'%s', RemoteAddrIP: [%s]",
        handler_name,
        request.method,
        request.url.path,
        api_remote_address(request),
    )


def api_remote_address(request: Request) -> str:
    """Return the client address as `host:port`, empty when unknown."""

    if request.client is None:
        return ""
    return f"{request.client.host}:{request.client.port}"
