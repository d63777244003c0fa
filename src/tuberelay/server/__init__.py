"""HTTP relay server for TubeRelay."""

from .app import create_app, serve_in_background
from .proxy import proxy_download

__all__ = ["create_app", "serve_in_background", "proxy_download"]
