"""HTTP server lifecycle: background listening and bounded graceful shutdown."""

import logging
import os
import signal
import threading
import time
from datetime import datetime, timezone
from enum import Enum
from typing import NoReturn

import uvicorn

from info_server.api import create_api_application
from info_server.config import AppSettings, config_split_listen_address

EXIT_STATUS_OK = 0
EXIT_STATUS_FATAL = 1
SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ServerState(str, Enum):
    """Lifecycle states of `InfoHttpServer`."""

    CONSTRUCTED = "constructed"
    LISTENING = "listening"
    SHUTTING_DOWN = "shutting-down"
    STOPPED = "stopped"


class InfoHttpServer:
    """Server descriptor owning the routing table and the uvicorn listener.

    The listener runs on its own thread. The calling thread blocks in
    `server_wait_for_shutdown` until a termination signal or a listener
    failure arrives, then drives a shutdown bounded by the grace period.

    Attributes:
        listen_address: Immutable `:PORT` listen address.
        logger: Application logger.
        start_time: Timestamp recorded at construction.
        application: FastAPI application carrying the routing table.
        read_timeout_seconds: Configured request read limit. Informational only;
            uvicorn has no per-request read deadline.
        write_timeout_seconds: Configured response write limit. Informational
            only; uvicorn has no per-request write deadline.
        idle_timeout_seconds: Keep-alive idle limit passed to uvicorn.
        shutdown_timeout_seconds: Grace period for in-flight requests.
    """

    def __init__(self, settings: AppSettings, listen_address: str, logger: logging.Logger):
        """Initialize the server and populate its routing table.

        Args:
            settings: Validated application settings.
            listen_address: Address returned by `config_resolve_listen_address`.
            logger: Application logger.

        Raises:
            ValueError: Raised when listen_address has no integer port.
        """

        self._listen_address = listen_address
        self.logger = logger
        self.start_time = datetime.now(timezone.utc)
        self.read_timeout_seconds = settings.read_timeout_seconds
        self.write_timeout_seconds = settings.write_timeout_seconds
        self.idle_timeout_seconds = settings.idle_timeout_seconds
        self.shutdown_timeout_seconds = settings.shutdown_timeout_seconds
        self.application = create_api_application(settings=settings, logger=logger, start_time=self.start_time)

        bind_host, bind_port = config_split_listen_address(listen_address, host=settings.application_host)
        self._listener = uvicorn.Server(
            uvicorn.Config(
                self.application,
                host=bind_host,
                port=bind_port,
                log_config=None,
                log_level=settings.log_level.lower(),
                timeout_keep_alive=int(settings.idle_timeout_seconds),
                timeout_graceful_shutdown=settings.shutdown_timeout_seconds,
            )
        )
        self._listener_thread: threading.Thread | None = None
        self._listener_failure: str | None = None
        self._shutdown_requested = threading.Event()
        self._wakeup = threading.Event()
        self._state = ServerState.CONSTRUCTED

    @property
    def listen_address(self) -> str:
        return self._listen_address

    @property
    def state(self) -> ServerState:
        return self._state

    @property
    def started(self) -> bool:
        """Whether the listener has bound its socket and accepts connections."""

        return bool(self._listener.started)

    def server_listen(self) -> None:
        """Start accepting connections on a background thread.

        Raises:
            RuntimeError: Raised when the server was already started.
        """

        if self._state is not ServerState.CONSTRUCTED:
            raise RuntimeError(f"server cannot listen from state {self._state.value}")

        self.logger.info("INFO: Starting http server listening at http://localhost%s/", self._listen_address)
        self._listener_thread = threading.Thread(
            target=self._server_run_listener,
            name="http-listener",
            daemon=True,
        )
        self._state = ServerState.LISTENING
        self._listener_thread.start()
        self.logger.info("Server listening on : %s PID:[%d]", self._listen_address, os.getpid())

    def _server_run_listener(self) -> None:
        try:
            self._listener.run()
        except SystemExit as error:
            # uvicorn exits the serving thread when the socket cannot be bound.
            self._listener_failure = f"listener exited with status {error.code}"
        except Exception as error:
            self._listener_failure = f"{type(error).__name__}: {error}"
        else:
            if not self._shutdown_requested.is_set():
                self._listener_failure = "listener stopped unexpectedly"
        finally:
            self._wakeup.set()

    def server_request_shutdown(self, signal_number: int | None = None) -> None:
        """Request a graceful shutdown; safe to call from a signal handler.

        Args:
            signal_number: Received signal number, if any.
        """

        if signal_number is not None:
            self.logger.info(
                "INFO: 'signal %d received, about to shut down server after max %s seconds...'",
                signal_number,
                self.shutdown_timeout_seconds,
            )
        self._shutdown_requested.set()
        self._wakeup.set()

    def server_wait_for_shutdown(self, install_signal_handlers: bool = True) -> int:
        """Block until shutdown is requested or the listener fails.

        Args:
            install_signal_handlers: Route SIGINT and SIGTERM to
                `server_request_shutdown`. Only possible on the main thread.

        Returns:
            int: Process exit status, 0 after a graceful shutdown and 1 when
            the listener failed.
        """

        if install_signal_handlers:
            for signal_number in SHUTDOWN_SIGNALS:
                signal.signal(signal_number, lambda received, _frame: self.server_request_shutdown(received))

        self._wakeup.wait()
        if self._listener_failure is not None and not self._shutdown_requested.is_set():
            self.logger.critical(
                "ERROR: 'Could not listen on %r: %s'",
                self._listen_address,
                self._listener_failure,
            )
            self._state = ServerState.STOPPED
            return EXIT_STATUS_FATAL

        deadline = time.monotonic() + self.shutdown_timeout_seconds
        self.server_shutdown(deadline)
        remaining_seconds = deadline - time.monotonic()
        if remaining_seconds > 0:
            time.sleep(remaining_seconds)
        self._state = ServerState.STOPPED
        self.logger.info("INFO: 'Server gracefully stopped, will exit'")
        return EXIT_STATUS_OK

    def server_shutdown(self, deadline: float) -> None:
        """Stop accepting connections and drain in-flight requests.

        uvicorn closes idle keep-alive connections, waits for in-flight
        requests for the grace period and cancels whatever is left.
        A listener still running at the deadline is logged and abandoned.

        Args:
            deadline: `time.monotonic()` value bounding the shutdown.
        """

        self._state = ServerState.SHUTTING_DOWN
        self._shutdown_requested.set()
        self._listener.should_exit = True
        if self._listener_thread is None:
            return

        self._listener_thread.join(timeout=max(0.0, deadline - time.monotonic()))
        if self._listener_thread.is_alive():
            self.logger.error(
                "ERROR: 'Problem doing Shutdown: grace period of %s seconds exceeded'",
                self.shutdown_timeout_seconds,
            )
        elif self._listener_failure is not None:
            self.logger.error("ERROR: 'Problem doing Shutdown: %s'", self._listener_failure)

    def server_start(self) -> NoReturn:
        """Listen, wait for a termination signal, then exit the process."""

        self.server_listen()
        raise SystemExit(self.server_wait_for_shutdown())
