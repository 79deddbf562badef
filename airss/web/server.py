"""Threaded WSGI server for the web view."""

import logging
import threading
from typing import Optional

from flask import Flask
from werkzeug.serving import make_server

from ..errors import ServerError

log = logging.getLogger(__name__)


class WebServer:
    """Serve a Flask app in the foreground or on a daemon thread."""

    def __init__(self, app: Flask, host: str = "0.0.0.0", port: int = 8080) -> None:
        self.app = app
        self.host = host
        self.port = port
        try:
            self._server = make_server(host, port, app, threaded=True)
        except OSError as e:
            raise ServerError(f"Error starting server on {host}:{port}: {e}") from e
        self._thread: Optional[threading.Thread] = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self._server.server_port}"

    def serve_forever(self) -> None:
        log.info("Starting web server at %s", self.url)
        self._server.serve_forever()

    def start_background(self) -> threading.Thread:
        if self._thread and self._thread.is_alive():
            log.debug("Web server already running; skipping start.")
            return self._thread

        self._thread = threading.Thread(
            target=self.serve_forever, name="WebServer", daemon=True
        )
        self._thread.start()
        return self._thread

    def shutdown(self) -> None:
        self._server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)
        self._server.server_close()
        log.info("Web server stopped.")
