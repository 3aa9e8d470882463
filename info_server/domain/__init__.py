"""Domain models used across application layer boundaries."""

from .models import NO_PARAMETER_NAME, UNKNOWN_HOSTNAME, RuntimeInfo
from .runtime_info import (
    domain_canonical_header_key,
    domain_collect_request_headers,
    domain_collect_runtime_info,
)

__all__ = [
    "NO_PARAMETER_NAME",
    "UNKNOWN_HOSTNAME",
    "RuntimeInfo",
    "domain_canonical_header_key",
    "domain_collect_request_headers",
    "domain_collect_runtime_info",
]
