"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the HTTP server.
"""

import argparse

from info_server import __version__
from info_server.bootstrap import bootstrap_create_server
from info_server.config import (
    DEFAULT_PORT,
    ConfigError,
    config_create_logger,
    config_load_settings,
    config_resolve_listen_address,
)

FALLBACK_APPLICATION_NAME = "py-info-server"


def main(argv: list[str] | None = None) -> None:
    """Run the selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument list; defaults to the process arguments.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with status 1 on configuration failure and with the
            server exit status after a `serve` run.
    """

    argument_parser = argparse.ArgumentParser(description="Diagnostic HTTP info server")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="serve",
        choices=("serve", "check-config"),
        help="Runtime command: `serve` starts the server, `check-config` validates configuration "
        "and prints the resolved listen address",
        type=str,
    )
    argument_parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parsed_arguments = argument_parser.parse_args(argv)

    settings = None
    try:
        settings = config_load_settings()
        if parsed_arguments.command == "check-config":
            print(config_resolve_listen_address(default_port=DEFAULT_PORT))
            return
        server = bootstrap_create_server(settings=settings)
    except ConfigError as error:
        application_name = settings.application_name if settings is not None else FALLBACK_APPLICATION_NAME
        logger = config_create_logger(application_name=application_name)
        logger.critical("ERROR: 'startup configuration failed: %s'", error)
        raise SystemExit(1) from error

    server.server_start()


if __name__ == "__main__":
    main()
