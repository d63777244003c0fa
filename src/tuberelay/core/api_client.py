"""YouTube media info API client with endpoint fallback."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import requests

from .errors import AccessDeniedError, ConfigurationError, RateLimitError, UpstreamError
from .models import EndpointAttempt, is_success

logger = logging.getLogger(__name__)

API_HOST = "youtube-media-downloader.p.rapidapi.com"
API_BASE_URL = f"https://{API_HOST}/v2"

# Tried in order until one answers with 2xx.
VIDEO_ENDPOINTS = ("video/details", "video/download", "video/info")
PLAYLIST_ENDPOINT = "playlist/details"
RELATED_ENDPOINT = "video/related"


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MediaInfoClient:
    """Resolves video and playlist ids through the media info API."""

    def __init__(self, api_key: str, session: Optional[requests.Session] = None,
                 base_url: str = API_BASE_URL):
        if not api_key:
            raise ConfigurationError(
                "API key not configured. Please set RAPIDAPI_KEY in environment variables."
            )
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self._headers = {
            "x-rapidapi-key": api_key,
            "x-rapidapi-host": API_HOST,
        }

    def endpoint_url(self, path: str, **params: str) -> str:
        return f"{self.base_url}/{path}?{urlencode(params)}"

    def _get(self, url: str) -> requests.Response:
        return self.session.get(url, headers=self._headers)

    def fetch_video_details(self, video_id: str) -> Dict[str, Any]:
        """Fetch video metadata, falling back across the video endpoints.

        The returned payload is annotated with ``_metadata`` naming the
        endpoint that answered and when.
        """
        endpoints = [self.endpoint_url(path, videoId=video_id) for path in VIDEO_ENDPOINTS]
        attempts: List[EndpointAttempt] = []
        response: Optional[requests.Response] = None

        for endpoint in endpoints:
            logger.info(f"Trying endpoint: {endpoint}")
            try:
                response = self._get(endpoint)
            except requests.RequestException as e:
                logger.warning(f"Error with endpoint {endpoint}: {e}")
                attempts.append(EndpointAttempt(endpoint, error=str(e)))
                continue

            attempt = EndpointAttempt(endpoint, status=response.status_code)
            attempts.append(attempt)
            if attempt.succeeded:
                logger.info(f"Success with endpoint: {endpoint}")
                data = response.json()
                data["_metadata"] = {"endpoint": endpoint, "timestamp": _utc_timestamp()}
                return data
            logger.info(f"Failed with endpoint {endpoint}, status: {response.status_code}")

        # Report on the last endpoint that produced an HTTP response
        status = response.status_code if response is not None else 500
        details = response.text if response is not None else "No response"
        logger.error(f"All endpoints failed for {video_id}. Last status {status}: {details}")
        logger.error(f"Attempts: {'; '.join(a.describe() for a in attempts)}")

        if status == 429:
            raise RateLimitError(
                "API rate limit exceeded. Please wait a moment and try again, "
                "or upgrade your RapidAPI plan.",
                details=details, tried_endpoints=endpoints,
            )
        if status == 403:
            raise AccessDeniedError(
                "API access denied. Please check your RapidAPI subscription.",
                details=details, tried_endpoints=endpoints,
            )
        raise UpstreamError(
            "Failed to fetch video information from all endpoints",
            status=status, details=details, tried_endpoints=endpoints,
        )

    def _fetch_single(self, url: str, what: str) -> Dict[str, Any]:
        logger.info(f"Fetching {what}: {url}")
        response = self._get(url)
        if is_success(response.status_code):
            return response.json()

        details = response.text
        logger.error(f"{what.capitalize()} API error: {response.status_code} {details}")
        if response.status_code == 429:
            raise RateLimitError(
                "API rate limit exceeded. Please wait a moment and try again.",
                details=details,
            )
        if response.status_code == 403:
            raise AccessDeniedError(
                "API access denied. Please check your RapidAPI subscription.",
                details=details,
            )
        raise UpstreamError(f"Failed to fetch {what}", status=response.status_code, details=details)

    def fetch_playlist_details(self, playlist_id: str) -> Dict[str, Any]:
        """Fetch playlist metadata (single endpoint, no fallback)."""
        return self._fetch_single(
            self.endpoint_url(PLAYLIST_ENDPOINT, playlistId=playlist_id),
            "playlist information",
        )

    def fetch_related_videos(self, video_id: str) -> Dict[str, Any]:
        """Fetch videos related to *video_id* (single endpoint, no fallback)."""
        return self._fetch_single(
            self.endpoint_url(RELATED_ENDPOINT, videoId=video_id),
            "related videos",
        )
