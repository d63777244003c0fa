"""Mapping of provider payloads to VideoInfo and download variant selection."""

from typing import Any, Dict, List, Optional

from .models import DownloadCandidate, VideoInfo

VIDEO_QUALITY_FALLBACKS = ("720p", "480p")

VIDEO_QUALITIES = ["720p", "480p", "360p"]
AUDIO_QUALITIES = ["128kbps", "192kbps", "320kbps"]
DEFAULT_QUALITY = {"mp4": "720p", "mp3": "128kbps"}


def _items(payload: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    section = payload.get(key) or {}
    if not isinstance(section, dict):
        return []
    return [item for item in section.get("items") or [] if isinstance(item, dict)]


def _candidate(item: Dict[str, Any], kind: str) -> DownloadCandidate:
    return DownloadCandidate(
        url=item.get("url") or "",
        container=item.get("extension") or item.get("mimeType") or "",
        quality_label=item.get("qualityLabel") or item.get("quality") or "",
        kind=kind,
    )


def parse_video_info(payload: Dict[str, Any], video_id: Optional[str] = None) -> VideoInfo:
    """Build a VideoInfo from a media info API response."""
    thumbnails = payload.get("thumbnails") or []
    thumbnail_url = ""
    if thumbnails and isinstance(thumbnails[0], dict):
        thumbnail_url = thumbnails[0].get("url") or ""

    try:
        duration = int(payload["lengthSeconds"]) if payload.get("lengthSeconds") else None
    except (TypeError, ValueError):
        duration = None

    channel = payload.get("channel") or {}
    author = channel.get("name") if isinstance(channel, dict) else None

    return VideoInfo(
        video_id=payload.get("id") or video_id,
        title=payload.get("title") or "Untitled video",
        thumbnail_url=thumbnail_url,
        duration_seconds=duration,
        author=author or "Unknown",
        video_candidates=[_candidate(i, "video") for i in _items(payload, "videos")],
        audio_candidates=[_candidate(i, "audio") for i in _items(payload, "audios")],
    )


def select_video_candidate(info: VideoInfo, quality: str) -> Optional[DownloadCandidate]:
    """Pick the requested quality, else 720p, else 480p, else the first variant."""
    candidates = info.video_candidates
    if not candidates:
        return None

    for label in (quality,) + VIDEO_QUALITY_FALLBACKS:
        for candidate in candidates:
            if candidate.quality_label == label:
                return candidate
    return candidates[0]


def select_audio_candidate(info: VideoInfo) -> Optional[DownloadCandidate]:
    """Pick the first audio variant. The requested bitrate is not considered."""
    return info.audio_candidates[0] if info.audio_candidates else None


def select_download_candidate(info: VideoInfo, media_format: str,
                              quality: str) -> Optional[DownloadCandidate]:
    if media_format == "mp4":
        return select_video_candidate(info, quality)
    if media_format == "mp3":
        return select_audio_candidate(info)
    raise ValueError(f"Unsupported format: {media_format}")


def select_download_url(info: VideoInfo, media_format: str, quality: str) -> str:
    """Return the download URL for the requested format, or "" if none exists."""
    candidate = select_download_candidate(info, media_format, quality)
    return candidate.url if candidate else ""
