import pytest

from tuberelay.core.selection import (
    parse_video_info,
    select_audio_candidate,
    select_download_url,
    select_video_candidate,
)

PAYLOAD = {
    "id": "dQw4w9WgXcQ",
    "title": "Never Gonna Give You Up",
    "lengthSeconds": "213",
    "channel": {"name": "Rick Astley"},
    "thumbnails": [{"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hq.jpg"}],
    "videos": {"items": [
        {"url": "https://cdn/360", "extension": "mp4", "quality": "360p"},
        {"url": "https://cdn/480", "extension": "mp4", "quality": "480p"},
        {"url": "https://cdn/720", "extension": "mp4", "quality": "720p"},
    ]},
    "audios": {"items": [
        {"url": "https://cdn/a1", "extension": "m4a", "quality": "128kbps"},
        {"url": "https://cdn/a2", "mimeType": "audio/webm", "quality": "160kbps"},
    ]},
}


def test_parse_video_info():
    info = parse_video_info(PAYLOAD)

    assert info.video_id == "dQw4w9WgXcQ"
    assert info.title == "Never Gonna Give You Up"
    assert info.author == "Rick Astley"
    assert info.duration_seconds == 213
    assert info.duration_label == "3:33"
    assert info.thumbnail_url.endswith("hq.jpg")
    assert [c.quality_label for c in info.video_candidates] == ["360p", "480p", "720p"]
    assert info.audio_candidates[1].container == "audio/webm"
    assert len(info.download_candidates) == 5


def test_parse_defaults_for_sparse_payload():
    info = parse_video_info({"lengthSeconds": "n/a", "videos": None}, video_id="abc")

    assert info.video_id == "abc"
    assert info.title == "Untitled video"
    assert info.author == "Unknown"
    assert info.thumbnail_url == ""
    assert info.duration_seconds is None
    assert info.duration_label == "N/A"
    assert info.download_candidates == []


def test_exact_quality_wins():
    info = parse_video_info(PAYLOAD)
    assert select_video_candidate(info, "480p").url == "https://cdn/480"


def test_missing_quality_falls_back_to_720p():
    info = parse_video_info(PAYLOAD)
    assert select_download_url(info, "mp4", "1080p") == "https://cdn/720"


def test_falls_back_to_480p_then_first():
    payload = dict(PAYLOAD, videos={"items": PAYLOAD["videos"]["items"][:2]})
    info = parse_video_info(payload)
    assert select_download_url(info, "mp4", "1080p") == "https://cdn/480"

    payload = dict(PAYLOAD, videos={"items": [{"url": "https://cdn/240", "quality": "240p"}]})
    info = parse_video_info(payload)
    assert select_download_url(info, "mp4", "1080p") == "https://cdn/240"


def test_audio_takes_first_item_regardless_of_bitrate():
    info = parse_video_info(PAYLOAD)
    assert select_audio_candidate(info).url == "https://cdn/a1"
    assert select_download_url(info, "mp3", "320kbps") == "https://cdn/a1"


def test_no_candidates_gives_empty_url():
    info = parse_video_info({"title": "Nothing"})
    assert select_download_url(info, "mp4", "720p") == ""
    assert select_download_url(info, "mp3", "128kbps") == ""


def test_unsupported_format():
    info = parse_video_info(PAYLOAD)
    with pytest.raises(ValueError):
        select_download_url(info, "flac", "lossless")
