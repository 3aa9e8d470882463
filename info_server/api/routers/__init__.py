"""API router package for endpoint composition."""

from .clock import api_create_clock_router
from .info import api_create_info_router
from .probes import api_create_health_router, api_create_readiness_router
from .wait import api_create_wait_router

__all__ = [
    "api_create_clock_router",
    "api_create_health_router",
    "api_create_info_router",
    "api_create_readiness_router",
    "api_create_wait_router",
]
