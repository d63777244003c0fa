"""HTTP client for the local relay server."""

import logging
from typing import Any, Dict, Optional

import requests

from .errors import RelayError
from .models import VideoInfo, is_success
from .selection import parse_video_info

logger = logging.getLogger(__name__)


class RelayClient:
    """Talks to the relay server's JSON API on behalf of the UI."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    @property
    def proxy_endpoint(self) -> str:
        return f"{self.base_url}/api/proxy-download"

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self.session.post(f"{self.base_url}{path}", json=payload)
        except requests.RequestException as e:
            raise RelayError(f"Could not reach the relay server: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not is_success(response.status_code):
            raise self._error_from(response.status_code, data)
        if not isinstance(data, dict):
            raise RelayError("Unexpected response from the relay server", response.status_code)
        return data

    @staticmethod
    def _error_from(status: int, data: Dict[str, Any]) -> RelayError:
        if status == 429:
            return RelayError(
                "Free request limit exceeded. Please wait a few minutes or upgrade your RapidAPI plan.",
                status,
            )
        if status == 403:
            return RelayError("API access denied. Please check your RapidAPI subscription.", status)

        message = data.get("error") if isinstance(data, dict) else None
        if not message:
            return RelayError("Could not fetch video information", status)
        details = data.get("details")
        if details:
            message = f"{message} - {details}"
        return RelayError(message, status)

    def resolve_video(self, video_id: str) -> VideoInfo:
        """Fetch and parse the metadata of a single video."""
        data = self._post("/api/youtube", {"videoId": video_id})
        logger.debug(f"Received data for {video_id}: {data.get('_metadata')}")
        return parse_video_info(data, video_id)

    def playlist(self, playlist_id: str) -> Dict[str, Any]:
        return self._post("/api/youtube/playlist", {"playlistId": playlist_id})

    def related(self, video_id: str) -> Dict[str, Any]:
        return self._post("/api/youtube/related", {"videoId": video_id})

    def health(self) -> Dict[str, Any]:
        response = self.session.get(f"{self.base_url}/api/health")
        response.raise_for_status()
        return response.json()
