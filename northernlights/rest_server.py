"""Minimal HTTP status API served on a background thread."""

from __future__ import annotations

import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

ROOT_MESSAGE = "TheNorthernLights REST API is alive "
HEALTH_BODY = '{"status":"ok"}'

_ROUTES = {
    "/": (ROOT_MESSAGE, "text/plain"),
    "/health": (HEALTH_BODY, "application/json"),
}


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self) -> None:
        route = _ROUTES.get(urlsplit(self.path).path)
        if route is None:
            self.send_error(404)
            return
        body, content_type = route
        payload = body.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format: str, *args: object) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)


class RestServer:
    """Serves ``/`` and ``/health`` over HTTP until stopped.

    Port 0 picks a free port; ``port`` then reports the one bound.
    Usable as a context manager.
    """

    def __init__(self, port: int = 8080, host: str = "0.0.0.0") -> None:
        self.host = host
        self._port = port
        self._server: ThreadingHTTPServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._server is not None

    @property
    def port(self) -> int:
        if self._server is not None:
            return self._server.server_address[1]
        return self._port

    def __enter__(self) -> RestServer:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Bind and start serving; raises OSError if the port cannot be bound."""
        if self._server is not None:
            return
        logger.info("Starting REST server on port %d", self._port)
        try:
            server = ThreadingHTTPServer((self.host, self._port), _Handler)
        except OSError:
            logger.error("Failed to start REST server on port %d", self._port)
            raise
        server.daemon_threads = True
        self._server = server
        self._thread = threading.Thread(
            target=server.serve_forever, name="rest-server", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop serving and release the port."""
        server, self._server = self._server, None
        if server is None:
            return
        server.shutdown()
        server.server_close()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        logger.info("REST server stopped.")