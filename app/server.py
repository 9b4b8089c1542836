"""
Server lifecycle for running the Blog API in-process.

``BlogServer`` serves an application built for a given database URL from
a background thread, so test suites and scripts can start it, talk to it
over real HTTP and stop it again, releasing the database engine.
"""

import logging
import threading
import time

import requests
from flask import Flask
from werkzeug.serving import BaseWSGIServer, make_server

from app import create_app, db

logger = logging.getLogger(__name__)


class BlogServer:
    """
    Start and stop a live Blog API server.

    Args:
        config_name: Configuration environment used to build the app.
        host: Interface to bind.
        port: Port to bind; 0 picks a free port.
    """

    def __init__(self, config_name: str = "testing", host: str = "127.0.0.1", port: int = 0):
        self.config_name = config_name
        self.host = host
        self.port = port
        self.app: Flask | None = None
        self._server: BaseWSGIServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def base_url(self) -> str:
        if self._server is None:
            raise RuntimeError("Server is not running")
        return f"http://{self.host}:{self._server.server_port}"

    @property
    def running(self) -> bool:
        return self._server is not None

    def start(self, database_url: str, timeout: float = 10.0) -> str:
        """
        Build the app against ``database_url`` and serve it.

        Returns:
            Base URL of the server once its health endpoint answers.

        Raises:
            RuntimeError: If the server is already running or never
                becomes healthy within ``timeout`` seconds.
        """
        if self.running:
            raise RuntimeError("Server is already running")

        self.app = create_app(self.config_name, database_url=database_url)
        self._server = make_server(self.host, self.port, self.app, threaded=True)
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

        base_url = self.base_url
        logger.info("Blog server starting at %s", base_url)
        try:
            self._wait_until_healthy(base_url, timeout)
        except RuntimeError:
            self.stop()
            raise
        return base_url

    @staticmethod
    def _wait_until_healthy(url: str, timeout: float, interval: float = 0.1) -> None:
        """Poll the health endpoint until ready or timeout."""
        deadline = time.time() + timeout
        while time.time() < deadline:
            try:
                response = requests.get(f"{url}/health", timeout=2)
                if response.status_code == 200:
                    return
            except requests.RequestException:
                pass
            time.sleep(interval)
        raise RuntimeError(f"Blog server at {url} not healthy after {timeout}s")

    def stop(self) -> None:
        """Shut the server down and release database connections."""
        if self._server is None:
            return

        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5)

        if self.app is not None:
            with self.app.app_context():
                db.session.remove()
                db.engine.dispose()

        logger.info("Blog server stopped")
        self._server = None
        self._thread = None
        self.app = None
