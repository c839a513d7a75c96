import datetime as dt
from flask import Flask
from dash import Dash
from typing import Optional

from .config import Settings, get_settings
from .data import get_client


class ServerFactory:
    """Class-based factory for the Flask server and Dash app."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    def create_server(self) -> Flask:
        server = Flask(__name__)

        @server.route("/health")
        def health():
            return {
                "status": "ok",
                "mode": "demo",
                "time": dt.datetime.now(dt.timezone.utc).isoformat(),
            }

        @server.route("/api/tables")
        def tables():
            return {"tables": get_client().registry.names()}

        return server

    def create_app(self, server: Flask) -> Dash:
        app = Dash(
            __name__,
            server=server,
            suppress_callback_exceptions=True,
            title=self.settings.app_title,
        )
        app._favicon = None
        return app


_factory = ServerFactory()


def create_server() -> Flask:
    return _factory.create_server()


def create_app(server: Flask) -> Dash:
    return _factory.create_app(server)
