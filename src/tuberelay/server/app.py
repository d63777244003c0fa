"""Flask application exposing the media info API and the download proxy."""

import logging
import threading
from datetime import datetime, timezone
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Dict, Optional, Tuple

import requests
from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.serving import make_server

from ..core.api_client import MediaInfoClient
from ..core.errors import ConfigurationError, TubeRelayError
from ..utils import Config, setup_logging
from ..version import __version__
from .proxy import proxy_download

logger = logging.getLogger(__name__)


def _request_params() -> Dict[str, Any]:
    """Merge query-string and JSON body parameters (body wins)."""
    params: Dict[str, Any] = request.args.to_dict()
    if request.method == 'POST':
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            params.update(body)
    return params


def _media_client() -> MediaInfoClient:
    config: Config = current_app.config['TUBERELAY']
    api_key = config.api_key
    if not api_key:
        logger.error("RAPIDAPI_KEY not configured")
        raise ConfigurationError(
            "API key not configured. Please set RAPIDAPI_KEY in environment variables."
        )
    return MediaInfoClient(api_key, session=current_app.extensions['tuberelay.session'])


def make_upstream_session() -> requests.Session:
    """Session shared by all request handlers. It never stores cookies."""
    session = requests.Session()
    session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
    return session


def create_app(config: Optional[Config] = None,
               session: Optional[requests.Session] = None) -> Flask:
    """Application factory."""
    app = Flask(__name__)
    app.config['TUBERELAY'] = config or Config()
    app.extensions['tuberelay.session'] = session or make_upstream_session()
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    @app.errorhandler(TubeRelayError)
    def handle_relay_error(e: TubeRelayError):
        return jsonify(e.to_dict()), e.status

    @app.errorhandler(requests.RequestException)
    def handle_transport_error(e: requests.RequestException):
        logger.error(f"Upstream request failed: {e}")
        return jsonify({'error': 'Internal server error', 'details': str(e)}), 500

    @app.route('/api/youtube', methods=['GET', 'POST'])
    def video_info():
        video_id = _request_params().get('videoId')
        if not video_id:
            return jsonify({'error': 'Video ID is required'}), 400

        client = _media_client()
        logger.info(f"Fetching video info for ID: {video_id}")
        return jsonify(client.fetch_video_details(str(video_id)))

    @app.route('/api/youtube/playlist', methods=['GET', 'POST'])
    def playlist_info():
        playlist_id = _request_params().get('playlistId')
        if not playlist_id:
            return jsonify({'error': 'Playlist ID is required'}), 400

        client = _media_client()
        logger.info(f"Fetching playlist info for ID: {playlist_id}")
        return jsonify(client.fetch_playlist_details(str(playlist_id)))

    @app.route('/api/youtube/related', methods=['GET', 'POST'])
    def related_videos():
        video_id = _request_params().get('videoId')
        if not video_id:
            return jsonify({'error': 'Video ID is required'}), 400

        client = _media_client()
        logger.info(f"Fetching related videos for ID: {video_id}")
        return jsonify(client.fetch_related_videos(str(video_id)))

    @app.route('/api/proxy-download', methods=['GET', 'POST'])
    def proxy():
        url = _request_params().get('url')
        if not url:
            return jsonify({'error': 'URL parameter is required'}), 400
        return proxy_download(str(url), app.extensions['tuberelay.session'])

    @app.route('/api/health')
    def health():
        return jsonify({
            'status': 'OK',
            'version': __version__,
            'timestamp': datetime.now(timezone.utc).isoformat(),
        })

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        # Let Flask render its own HTTP errors (404, 405, ...)
        if isinstance(e, HTTPException):
            return e
        logger.error(f"API route error: {e}", exc_info=True)
        return jsonify({'error': 'Internal server error', 'details': str(e)}), 500

    return app


def serve_in_background(config: Config) -> Tuple[threading.Thread, Any]:
    """Run the relay on a daemon thread and return (thread, server)."""
    app = create_app(config)
    server = make_server(config.host, config.port, app, threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    logger.info(f"Relay server running on http://{config.host}:{config.port}")
    return thread, server


def main():
    """Entry point for ``tuberelay-server``."""
    setup_logging()
    config = Config()
    app = create_app(config)
    logger.info(f"Server running on port {config.port}")
    logger.info(f"Health check: http://{config.host}:{config.port}/api/health")
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == "__main__":
    main()
