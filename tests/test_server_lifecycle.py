"""Tests for server listening and bounded graceful shutdown.

These tests run a real uvicorn listener on a free local port and trigger
shutdown through `server_request_shutdown` or a real SIGTERM.
"""

import logging
import os
import signal
import socket
import sys
import threading
import time

import httpx
import pytest

from info_server.config import AppSettings
from info_server.server import EXIT_STATUS_FATAL, EXIT_STATUS_OK, InfoHttpServer, ServerState


def _free_port() -> int:
    """Reserve and release an ephemeral local port.

    Returns:
        int: Port number that was free at the time of the call.

    Raises:
        OSError: Raised when no port can be bound.
    """

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as candidate:
        candidate.bind(("127.0.0.1", 0))
        return candidate.getsockname()[1]


def _build_server(port: int, wait_seconds: int, shutdown_timeout_seconds: float) -> InfoHttpServer:
    settings = AppSettings(
        application_host="127.0.0.1",
        wait_seconds=wait_seconds,
        shutdown_timeout_seconds=shutdown_timeout_seconds,
    )
    return InfoHttpServer(settings=settings, listen_address=f":{port}", logger=logging.getLogger("lifecycle-test"))


def _wait_until_started(server: InfoHttpServer, timeout_seconds: float = 10.0) -> None:
    """Poll until the listener accepts connections.

    Args:
        server: Server being started.
        timeout_seconds: Maximum time to wait.

    Returns:
        None: Returns once the listener is up.

    Raises:
        AssertionError: Raised when the listener does not come up in time.
    """

    deadline = time.monotonic() + timeout_seconds
    while not server.started:
        assert time.monotonic() < deadline, "listener did not start"
        time.sleep(0.05)


def _fetch(port: int, path: str, results: dict[str, object]) -> None:
    """Issue a GET request and record its status code or failure.

    Args:
        port: Server port.
        path: Requested path.
        results: Mapping receiving `status_code` or `error`.

    Returns:
        None: Results are stored in the mapping.

    Raises:
        RuntimeError: This helper records errors instead of raising them.
    """

    try:
        with httpx.Client(trust_env=False, timeout=8.0) as client:
            response = client.get(f"http://127.0.0.1:{port}{path}")
        results["status_code"] = response.status_code
        results["body"] = response.text
    except httpx.HTTPError as error:
        results["error"] = error


def test_server_completes_in_flight_request_within_grace_period() -> None:
    """Finish an in-flight `/wait` request, then exit 0 after the deadline.

    Returns:
        None: Assertions validate graceful completion.

    Raises:
        AssertionError: Raised when the request is dropped or status is wrong.
    """

    port = _free_port()
    server = _build_server(port=port, wait_seconds=1, shutdown_timeout_seconds=3.0)
    server.server_listen()
    _wait_until_started(server)
    results: dict[str, object] = {}
    request_thread = threading.Thread(target=_fetch, args=(port, "/wait", results))
    request_thread.start()
    time.sleep(0.3)

    shutdown_started_at = time.monotonic()
    server.server_request_shutdown(signal.SIGTERM)
    exit_status = server.server_wait_for_shutdown(install_signal_handlers=False)
    shutdown_elapsed = time.monotonic() - shutdown_started_at
    request_thread.join(timeout=10)

    assert exit_status == EXIT_STATUS_OK
    assert server.state is ServerState.STOPPED
    assert results.get("status_code") == 200
    assert results.get("body") == '{"waited":"1 seconds"}'
    assert shutdown_elapsed >= 3.0


def test_server_abandons_request_exceeding_grace_period() -> None:
    """Drop a request outliving the grace period and still exit 0.

    Returns:
        None: Assertions validate bounded shutdown.

    Raises:
        AssertionError: Raised when the request completes or status is wrong.
    """

    port = _free_port()
    server = _build_server(port=port, wait_seconds=4, shutdown_timeout_seconds=1.0)
    server.server_listen()
    _wait_until_started(server)
    results: dict[str, object] = {}
    request_thread = threading.Thread(target=_fetch, args=(port, "/wait", results))
    request_thread.start()
    time.sleep(0.3)

    shutdown_started_at = time.monotonic()
    server.server_request_shutdown(signal.SIGINT)
    exit_status = server.server_wait_for_shutdown(install_signal_handlers=False)
    shutdown_elapsed = time.monotonic() - shutdown_started_at
    request_thread.join(timeout=10)

    assert exit_status == EXIT_STATUS_OK
    assert shutdown_elapsed >= server.shutdown_timeout_seconds
    assert not request_thread.is_alive()
    assert results.get("status_code") != 200


def test_server_serves_wait_requests_concurrently() -> None:
    """Serve two delayed requests in parallel rather than one after another.

    Returns:
        None: Assertions validate per-request suspension.

    Raises:
        AssertionError: Raised when requests are serialized.
    """

    port = _free_port()
    server = _build_server(port=port, wait_seconds=1, shutdown_timeout_seconds=1.0)
    server.server_listen()
    _wait_until_started(server)
    results = [{}, {}]
    request_threads = [threading.Thread(target=_fetch, args=(port, "/wait", result)) for result in results]

    started_at = time.monotonic()
    for request_thread in request_threads:
        request_thread.start()
    for request_thread in request_threads:
        request_thread.join(timeout=10)
    elapsed_seconds = time.monotonic() - started_at

    server.server_request_shutdown()
    assert server.server_wait_for_shutdown(install_signal_handlers=False) == EXIT_STATUS_OK
    assert [result.get("status_code") for result in results] == [200, 200]
    assert elapsed_seconds < 1.9


def test_server_reports_fatal_status_when_port_is_taken() -> None:
    """Return the fatal exit status when the listen port cannot be bound.

    Returns:
        None: Assertions validate bind failure handling.

    Raises:
        AssertionError: Raised when the failure is not surfaced.
    """

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as occupant:
        occupant.bind(("127.0.0.1", 0))
        occupant.listen()
        port = occupant.getsockname()[1]
        server = _build_server(port=port, wait_seconds=0, shutdown_timeout_seconds=1.0)

        server.server_listen()
        exit_status = server.server_wait_for_shutdown(install_signal_handlers=False)

    assert exit_status == EXIT_STATUS_FATAL
    assert server.state is ServerState.STOPPED


def test_server_rejects_second_listen() -> None:
    server = _build_server(port=_free_port(), wait_seconds=0, shutdown_timeout_seconds=1.0)
    assert server.state is ServerState.CONSTRUCTED
    assert server.listen_address.startswith(":")

    server.server_listen()
    _wait_until_started(server)
    try:
        assert server.state is ServerState.LISTENING
        with pytest.raises(RuntimeError):
            server.server_listen()
    finally:
        server.server_request_shutdown()
        server.server_wait_for_shutdown(install_signal_handlers=False)


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals required")
def test_server_shuts_down_on_sigterm() -> None:
    """Install signal handlers and shut down when SIGTERM arrives.

    Returns:
        None: Assertions validate signal-driven shutdown.

    Raises:
        AssertionError: Raised when the signal is not handled.
    """

    previous_handlers = {number: signal.getsignal(number) for number in (signal.SIGINT, signal.SIGTERM)}
    server = _build_server(port=_free_port(), wait_seconds=0, shutdown_timeout_seconds=1.0)
    server.server_listen()
    _wait_until_started(server)
    sender = threading.Timer(0.3, os.kill, args=(os.getpid(), signal.SIGTERM))
    sender.start()
    try:
        exit_status = server.server_wait_for_shutdown(install_signal_handlers=True)
    finally:
        sender.cancel()
        for number, handler in previous_handlers.items():
            signal.signal(number, handler)

    assert exit_status == EXIT_STATUS_OK
    assert server.state is ServerState.STOPPED
