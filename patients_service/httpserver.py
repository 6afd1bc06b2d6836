"""The HTTP server that hosts the API."""

from __future__ import annotations

from flask import Flask

from .config import ENV_LOCAL, ENV_PROD, ServerConfig


class HttpServerError(Exception):
    """Raised when the HTTP server cannot start or stops with an error."""


class HttpServer:
    """A Flask application configured for the running environment."""

    def __init__(self, env: str, server_config: ServerConfig | None = None) -> None:
        self.app = Flask("patients_service")
        if env == ENV_LOCAL:
            self.app.debug = True
        elif env == ENV_PROD:
            self.app.debug = False
        self.server_config = server_config

    def run(self, server_config: ServerConfig) -> None:
        """Serve requests on the configured host and port until stopped."""
        try:
            self.app.run(
                host=server_config.host,
                port=server_config.port,
                use_reloader=False,
            )
        except (OSError, SystemExit) as exc:
            raise HttpServerError(f"error http server: {exc}") from exc