"""
Health check endpoint for the interview monitor.
"""

from __future__ import annotations
import json
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Optional, Callable
from threading import Thread
from recruitdesk.logging import logger


class HealthCheckHandler(BaseHTTPRequestHandler):
    """HTTP handler for health check endpoints."""

    health_func: Optional[Callable[[], dict]] = None
    alerts_func: Optional[Callable[[], list]] = None

    def do_GET(self) -> None:
        path = self.path.rstrip("/") or "/"
        if path == "/health":
            self._handle_health()
        elif path in ("/", "/status"):
            self._send_response(200, {"service": "recruit-desk", "status": "running"})
        elif path == "/alerts":
            self._handle_alerts()
        else:
            self._send_response(404, {"error": "Not found"})

    def _handle_health(self) -> None:
        if not self.health_func:
            self._send_response(503, {"status": "unavailable", "message": "Health check not configured"})
            return
        try:
            health_data = self.health_func()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            self._send_response(500, {"status": "error", "error": str(e)})
            return
        status_code = 200 if health_data.get("status") == "healthy" else 503
        self._send_response(status_code, health_data)

    def _handle_alerts(self) -> None:
        alerts = self.alerts_func() if self.alerts_func else []
        self._send_response(200, {"alerts": alerts})

    def _send_response(self, status_code: int, data: dict) -> None:
        try:
            self.send_response(status_code)
            self.send_header("Content-Type", "application/json")
            self.end_headers()
            self.wfile.write(json.dumps(data, indent=2, default=str).encode("utf-8"))
        except BrokenPipeError:
            # Client closed connection before response was sent
            pass

    def log_message(self, format: str, *args) -> None:
        logger.debug(f"HTTP {format % args}")


class HealthCheckServer:
    """
    Small HTTP server on a daemon thread.

    Endpoints:
    - GET /health - monitor health (200 healthy, 503 otherwise)
    - GET /status - liveness
    - GET /alerts - toasts currently visible
    """

    def __init__(
        self,
        port: int = 8080,
        health_func: Optional[Callable[[], dict]] = None,
        alerts_func: Optional[Callable[[], list]] = None,
    ) -> None:
        self.port = port
        self.server: Optional[HTTPServer] = None
        self.thread: Optional[Thread] = None
        HealthCheckHandler.health_func = staticmethod(health_func) if health_func else None
        HealthCheckHandler.alerts_func = staticmethod(alerts_func) if alerts_func else None

    def start(self) -> None:
        if self.server:
            logger.warning("Health check server is already running")
            return

        self.server = HTTPServer(("0.0.0.0", self.port), HealthCheckHandler)
        self.thread = Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()
        logger.info(f"Health check server started on port {self.port}")

    def stop(self) -> None:
        if self.server:
            self.server.shutdown()
            self.server.server_close()
            self.server = None
            logger.info("Health check server stopped")
