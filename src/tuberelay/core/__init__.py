"""Core functionality for TubeRelay."""

from .models import (
    DownloadCandidate,
    DownloadProgress,
    EndpointAttempt,
    VideoInfo,
    VideoReference,
)
from .errors import (
    AccessDeniedError,
    ConfigurationError,
    DownloadError,
    RateLimitError,
    RelayError,
    TubeRelayError,
    UpstreamError,
)
from .url_parser import (
    extract_playlist_id,
    extract_video_id,
    is_valid_youtube_url,
    parse_video_reference,
)
from .selection import parse_video_info, select_download_url
from .api_client import MediaInfoClient
from .downloader import ProxyDownloader
from .relay_client import RelayClient

__all__ = [
    "DownloadCandidate",
    "DownloadProgress",
    "EndpointAttempt",
    "VideoInfo",
    "VideoReference",
    "TubeRelayError",
    "ConfigurationError",
    "UpstreamError",
    "RateLimitError",
    "AccessDeniedError",
    "DownloadError",
    "RelayError",
    "is_valid_youtube_url",
    "extract_video_id",
    "extract_playlist_id",
    "parse_video_reference",
    "parse_video_info",
    "select_download_url",
    "MediaInfoClient",
    "ProxyDownloader",
    "RelayClient",
]
