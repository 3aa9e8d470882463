"""Runtime snapshot collection helpers."""

import logging
import os
import platform
import socket
import sys
import threading
from collections.abc import Iterable
from datetime import datetime, timezone

from info_server.config import AppSettings

from .models import NO_PARAMETER_NAME, UNKNOWN_HOSTNAME, RuntimeInfo


def domain_collect_runtime_info(
    settings: AppSettings,
    start_time: datetime,
    logger: logging.Logger,
) -> RuntimeInfo:
    """Collect the static part of the runtime snapshot.

    Args:
        settings: Validated application settings providing name and version.
        start_time: Timezone-aware server start timestamp.
        logger: Logger receiving host name lookup failures.

    Returns:
        RuntimeInfo: Snapshot with empty per-request fields.
    """

    try:
        host_name = socket.gethostname()
    except OSError as error:
        logger.error("ERROR: 'socket.gethostname() returned an error : %s'", error)
        host_name = UNKNOWN_HOSTNAME

    return RuntimeInfo(
        hostname=host_name,
        pid=os.getpid(),
        ppid=os.getppid(),
        uid=os.getuid() if hasattr(os, "getuid") else -1,
        appname=settings.application_name,
        version=settings.application_version,
        param_name=NO_PARAMETER_NAME,
        remote_addr="",
        os=sys.platform,
        arch=platform.machine(),
        runtime=f"{platform.python_implementation()} {platform.python_version()}",
        num_threads=str(threading.active_count()),
        num_cpu=str(os.cpu_count() or 1),
        uptime=str(datetime.now(timezone.utc) - start_time),
        env_vars=[f"{key}={value}" for key, value in os.environ.items()],
        headers={},
    )


def domain_canonical_header_key(name: str) -> str:
    """Return the canonical MIME form of a header name.

    Example: `x-forwarded-for` becomes `X-Forwarded-For`.
    """

    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


def domain_collect_request_headers(raw_headers: Iterable[tuple[bytes, bytes]]) -> dict[str, list[str]]:
    """Group raw ASGI headers into a canonical-name multimap.

    The `Host` header is request metadata and is left out of the map.

    Args:
        raw_headers: Header name/value byte pairs in arrival order.

    Returns:
        dict[str, list[str]]: Header values keyed by canonical name.
    """

    headers: dict[str, list[str]] = {}
    for raw_name, raw_value in raw_headers:
        header_name = domain_canonical_header_key(raw_name.decode("latin-1"))
        if header_name == "Host":
            continue
        headers.setdefault(header_name, []).append(raw_value.decode("latin-1"))
    return headers
