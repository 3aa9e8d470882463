"""Configuration package for runtime settings and startup validation."""

from .log_setup import config_create_logger
from .settings import (
    DEFAULT_PORT,
    AppSettings,
    ConfigError,
    config_load_settings,
    config_resolve_listen_address,
    config_split_listen_address,
)

__all__ = [
    "DEFAULT_PORT",
    "AppSettings",
    "ConfigError",
    "config_create_logger",
    "config_load_settings",
    "config_resolve_listen_address",
    "config_split_listen_address",
]
