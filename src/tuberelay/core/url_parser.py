"""YouTube URL validation and identifier extraction."""

import logging
import re
from typing import Optional

from .models import VideoReference

logger = logging.getLogger(__name__)

_ID = r"[a-zA-Z0-9_-]{11}"
_PREFIX = r"^(https?://)?(www\.)?"

# Broad shapes accepted as "a YouTube video URL".
VALIDATION_PATTERNS = [
    re.compile(_PREFIX + r"youtube\.com/watch\?v=" + _ID),
    re.compile(_PREFIX + r"youtu\.be/" + _ID),
    re.compile(_PREFIX + r"youtube\.com/shorts/" + _ID),
    re.compile(_PREFIX + r"youtube\.com/live/" + _ID),
    re.compile(_PREFIX + r"youtube\.com/embed/" + _ID),
    re.compile(_PREFIX + r"youtube\.com/v/" + _ID),
    re.compile(_PREFIX + r"youtube\.com/.*[?&]v=" + _ID),
    re.compile(r"^(https?://)?m\.youtube\.com/watch\?v=" + _ID),
]

# Most specific first; the last two are generic fallbacks.
EXTRACTION_PATTERNS = [
    re.compile(r"(?:youtu\.be/)(" + _ID + ")"),
    re.compile(r"(?:youtube\.com/watch\?v=)(" + _ID + ")"),
    re.compile(r"(?:youtube\.com/embed/)(" + _ID + ")"),
    re.compile(r"(?:youtube\.com/v/)(" + _ID + ")"),
    re.compile(r"(?:youtube\.com/shorts/)(" + _ID + ")"),
    re.compile(r"(?:youtube\.com/live/)(" + _ID + ")"),
    re.compile(r"(?:youtube\.com/.*[?&]v=)(" + _ID + ")"),
    re.compile(r"(?:youtube\.com/.*/)(" + _ID + r")(?:[?&]|$)"),
]

PLAYLIST_PATTERN = re.compile(r"(?:youtube\.com|youtu\.be)/.*[?&]list=([a-zA-Z0-9_-]+)")
VIDEO_ID_PATTERN = re.compile(r"^" + _ID + r"$")


def _clean(url) -> str:
    if not isinstance(url, str):
        return ""
    return url.strip()


def is_valid_youtube_url(url: str) -> bool:
    """Return True if *url* looks like one of the recognised video URL shapes."""
    cleaned = _clean(url)
    if not cleaned:
        return False
    return any(pattern.search(cleaned) for pattern in VALIDATION_PATTERNS)


def extract_video_id(url: str) -> Optional[str]:
    """Extract the 11-character video id, or None if no pattern matches."""
    cleaned = _clean(url)
    if not cleaned:
        return None

    for pattern in EXTRACTION_PATTERNS:
        match = pattern.search(cleaned)
        if match and len(match.group(1)) == 11:
            logger.debug(f"Extracted video ID {match.group(1)} using pattern {pattern.pattern}")
            return match.group(1)

    logger.info(f"Could not extract video ID from URL: {cleaned}")
    return None


def extract_playlist_id(url: str) -> Optional[str]:
    """Extract the ``list=`` playlist id from a YouTube URL."""
    match = PLAYLIST_PATTERN.search(_clean(url))
    return match.group(1) if match else None


def is_video_id(value: str) -> bool:
    return isinstance(value, str) and bool(VIDEO_ID_PATTERN.match(value))


def parse_video_reference(url: str) -> VideoReference:
    """Build a VideoReference from raw user input."""
    return VideoReference(
        raw_url=url if isinstance(url, str) else "",
        video_id=extract_video_id(url),
        playlist_id=extract_playlist_id(url),
    )
