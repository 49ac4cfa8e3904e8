"""Minimal health endpoint server."""

from __future__ import annotations

from http.server import BaseHTTPRequestHandler, HTTPServer
import json
from typing import Callable, Dict

LIVE_PATHS = ("/health", "/health/live")
READY_PATH = "/health/ready"


class HealthHandler(BaseHTTPRequestHandler):
    """Serves the runtime snapshot; readiness requires a running scheduler."""

    def do_GET(self) -> None:  # noqa: N802
        if self.path not in LIVE_PATHS and self.path != READY_PATH:
            self.send_response(404)
            self.end_headers()
            return

        snapshot = self.server.get_health()  # type: ignore[attr-defined]
        status = 200
        if self.path == READY_PATH and snapshot.get("status") != "running":
            status = 503

        body = json.dumps(snapshot).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        return


class HealthServer(HTTPServer):
    """HTTP server bound to a snapshot callback."""

    def __init__(self, host: str, port: int, get_health: Callable[[], Dict[str, object]]) -> None:
        self.get_health = get_health
        super().__init__((host, port), HealthHandler)
