"""Filename and human-readable formatting helpers."""

import re

_INVALID_CHARS = re.compile(r'[<>:"/\\|?*]')
_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def sanitize_filename(filename: str, max_length: int = 200) -> str:
    """Remove characters that are invalid in filenames and collapse whitespace."""
    cleaned = _INVALID_CHARS.sub("", filename)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned[:max_length]


def generate_filename(title: str, media_format: str) -> str:
    """Build ``<sanitized title>.<format>``."""
    stem = sanitize_filename(title) or "download"
    return f"{stem}.{media_format.lower()}"


def format_file_size(num_bytes: int) -> str:
    """Format a byte count like ``1.5 MB``."""
    if not num_bytes or num_bytes <= 0:
        return "0 Bytes"

    index = 0
    while num_bytes >= 1024 ** (index + 1) and index < len(_SIZE_UNITS) - 1:
        index += 1
    value = round(num_bytes / (1024 ** index), 2)
    # Drop trailing zeros ("1.50" -> "1.5", "2.00" -> "2")
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[index]}"


def format_duration(seconds: float) -> str:
    """Format duration like YouTube (M:SS or H:MM:SS)."""
    if not seconds or seconds <= 0:
        return "0:00"

    total_seconds = int(float(seconds))
    if total_seconds < 3600:
        minutes = total_seconds // 60
        secs = total_seconds % 60
        return f"{minutes}:{secs:02d}"
    else:
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60
        return f"{hours}:{minutes:02d}:{secs:02d}"
