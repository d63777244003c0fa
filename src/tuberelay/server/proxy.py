"""Same-origin relay for remote media files."""

import logging
from typing import Iterator

import requests
from flask import Response, jsonify, stream_with_context

from ..core.models import is_success

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 64

# The media CDN rejects requests that do not look like they come from youtube.com
UPSTREAM_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
                  '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
    'Accept': '*/*',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept-Encoding': 'identity',
    'Referer': 'https://www.youtube.com/',
    'Origin': 'https://www.youtube.com',
}

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type',
}


def _relay(upstream: requests.Response) -> Iterator[bytes]:
    try:
        for chunk in upstream.iter_content(chunk_size=CHUNK_SIZE):
            if chunk:
                yield chunk
    finally:
        upstream.close()


def proxy_download(url: str, session: requests.Session) -> Response:
    """Fetch *url* server-side and stream it back with pass-through headers."""
    logger.info(f"Proxy fetching: {url}")
    try:
        upstream = session.get(url, headers=UPSTREAM_HEADERS, stream=True, allow_redirects=True)
    except requests.RequestException as e:
        logger.error(f"Proxy error: {e}")
        return jsonify({'error': f'Proxy error: {e}'}), 500

    if not is_success(upstream.status_code):
        logger.error(f"Proxy HTTP error: {upstream.status_code} {upstream.reason}")
        upstream.close()
        return jsonify({'error': f'HTTP error: {upstream.status_code} {upstream.reason}'}), upstream.status_code

    content_type = upstream.headers.get('content-type') or 'application/octet-stream'
    content_length = upstream.headers.get('content-length')
    size = f"{content_length} bytes" if content_length else "unknown size"
    logger.info(f"Proxy success: {content_type}, {size}")

    headers = dict(CORS_HEADERS)
    headers['Content-Type'] = content_type
    if content_length:
        headers['Content-Length'] = content_length

    return Response(
        stream_with_context(_relay(upstream)),
        status=upstream.status_code,
        headers=headers,
    )
