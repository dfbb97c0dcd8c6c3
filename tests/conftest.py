"""Shared pytest configuration and fixtures."""

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from nginx_check.utils.logger import setup_logger


LINE1_OK = "Active connections: 33"
LINE2_OK = "server accepts handled requests"
LINE3_OK = "1237 89 91"
LINE4_OK = "Reading: 55 Writing: 767 Waiting: 1234"
ALL_LINES_OK = f"{LINE1_OK}\n{LINE2_OK}\n{LINE3_OK}\n{LINE4_OK}\n"

HOSTNAME = "myhost.sensu.local"
PORT = "3456"

FIXED_NOW = 1700000000.5
FIXED_NOW_MS = 1700000000500

EXPECTED_VALUES = {
    "nginx_active": 33.0,
    "nginx_accepts": 1237.0,
    "nginx_handled": 89.0,
    "nginx_requests": 91.0,
    "nginx_reading": 55.0,
    "nginx_writing": 767.0,
    "nginx_waiting": 1234.0,
}

# Seconds the /sleep endpoint waits before answering
SLEEP_SECONDS = 10


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test", "DEBUG")


@pytest.fixture
def fixed_clock():
    """Clock always returning FIXED_NOW."""
    return lambda: FIXED_NOW


class _StatusHandler(BaseHTTPRequestHandler):
    """Serves the status page, a slow endpoint and 404 for anything else."""

    def do_GET(self) -> None:  # noqa: N802
        if self.path.endswith("nginx_status"):
            self._reply(200, ALL_LINES_OK.encode())
        elif self.path.endswith("sleep"):
            time.sleep(SLEEP_SECONDS)
            self._reply(200, ALL_LINES_OK.encode())
        elif self.path.endswith("garbage"):
            self._reply(200, b"Active connections: 1\n")
        else:
            self._reply(404, b"NOT FOUND")

    def _reply(self, status: int, body: bytes) -> None:
        try:
            self.send_response(status)
            self.send_header("Content-Type", "text/plain")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        except (BrokenPipeError, ConnectionResetError):
            # Client gave up (timeout tests)
            pass

    def log_message(self, format, *args) -> None:  # noqa: A002
        return


@pytest.fixture(scope="session")
def status_server():
    """Local HTTP server; yields its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _StatusHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_port}"
    finally:
        server.shutdown()
        server.server_close()
