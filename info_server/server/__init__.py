"""Server lifecycle package: listener ownership and graceful shutdown."""

from .lifecycle import EXIT_STATUS_FATAL, EXIT_STATUS_OK, InfoHttpServer, ServerState

__all__ = ["EXIT_STATUS_FATAL", "EXIT_STATUS_OK", "InfoHttpServer", "ServerState"]
