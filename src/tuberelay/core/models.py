"""Data models for video references, metadata and download progress."""

from dataclasses import dataclass, field
from typing import List, Optional

from ..utils.files import format_duration


def is_success(status: int) -> bool:
    """True for 2xx statuses only (redirects are not a success)."""
    return 200 <= status < 300


@dataclass(frozen=True)
class VideoReference:
    """Identifiers extracted from a user-supplied URL."""
    raw_url: str
    video_id: Optional[str] = None     # exactly 11 chars of [a-zA-Z0-9_-]
    playlist_id: Optional[str] = None


@dataclass
class DownloadCandidate:
    """A downloadable variant returned by the media info API."""
    url: str
    container: str        # e.g., "mp4", "webm", "m4a"
    quality_label: str    # e.g., "720p" or "128kbps"
    kind: str = "video"   # "video" or "audio"


@dataclass
class VideoInfo:
    """Metadata for a single video, derived from one API response."""
    video_id: Optional[str]
    title: str
    thumbnail_url: str
    duration_seconds: Optional[int]
    author: str
    video_candidates: List[DownloadCandidate] = field(default_factory=list)
    audio_candidates: List[DownloadCandidate] = field(default_factory=list)

    @property
    def download_candidates(self) -> List[DownloadCandidate]:
        return self.video_candidates + self.audio_candidates

    @property
    def duration_label(self) -> str:
        if self.duration_seconds is None:
            return "N/A"
        return format_duration(self.duration_seconds)


@dataclass(frozen=True)
class DownloadProgress:
    """Read-only snapshot emitted after each received chunk."""
    loaded: int
    total: int        # 0 when the size is unknown
    percentage: int   # 0..100


@dataclass
class EndpointAttempt:
    """Outcome of a single upstream call during a fallback fetch."""
    endpoint: str
    status: Optional[int] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status is not None and is_success(self.status)

    def describe(self) -> str:
        return f"{self.endpoint} -> {self.status if self.status is not None else self.error}"
