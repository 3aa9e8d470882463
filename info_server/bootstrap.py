"""Application bootstrap wiring for startup validation and server assembly."""

import logging

from info_server.config import (
    DEFAULT_PORT,
    AppSettings,
    config_create_logger,
    config_load_settings,
    config_resolve_listen_address,
)
from info_server.server import InfoHttpServer


def bootstrap_create_server(
    settings: AppSettings | None = None,
    logger: logging.Logger | None = None,
) -> InfoHttpServer:
    """Assemble the HTTP server after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.
        logger: Optional logger; created from settings when omitted.

    Returns:
        InfoHttpServer: Server with its routing table populated, not yet listening.

    Raises:
        ConfigError: Raised when settings or the `PORT` override are invalid.
    """

    resolved_settings = settings or config_load_settings()
    listen_address = config_resolve_listen_address(default_port=DEFAULT_PORT)
    server_logger = logger or config_create_logger(
        application_name=resolved_settings.application_name,
        log_level=resolved_settings.log_level,
    )
    server_logger.info(
        "INFO: 'Starting %s version:%s HTTP server on port %s'",
        resolved_settings.application_name,
        resolved_settings.application_version,
        listen_address,
    )
    return InfoHttpServer(settings=resolved_settings, listen_address=listen_address, logger=server_logger)
