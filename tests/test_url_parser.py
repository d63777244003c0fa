import pytest

from tuberelay.core.url_parser import (
    extract_playlist_id,
    extract_video_id,
    is_valid_youtube_url,
    is_video_id,
    parse_video_reference,
)

VIDEO_ID = "dQw4w9WgXcQ"


@pytest.mark.parametrize("url", [
    f"https://www.youtube.com/watch?v={VIDEO_ID}",
    f"https://youtu.be/{VIDEO_ID}",
    f"https://www.youtube.com/shorts/{VIDEO_ID}",
    f"https://www.youtube.com/live/{VIDEO_ID}",
    f"https://www.youtube.com/embed/{VIDEO_ID}",
    f"https://www.youtube.com/v/{VIDEO_ID}",
    f"https://www.youtube.com/watch?feature=share&v={VIDEO_ID}",
    f"https://m.youtube.com/watch?v={VIDEO_ID}",
    f"youtube.com/watch?v={VIDEO_ID}",
])
def test_recognised_shapes(url):
    assert is_valid_youtube_url(url)
    assert extract_video_id(url) == VIDEO_ID


def test_surrounding_whitespace_is_ignored():
    url = f"  https://youtu.be/{VIDEO_ID}\n"
    assert is_valid_youtube_url(url)
    assert extract_video_id(url) == VIDEO_ID


def test_extra_query_parameters_do_not_change_id():
    assert extract_video_id(f"https://youtu.be/{VIDEO_ID}?t=42") == VIDEO_ID
    assert extract_video_id(f"https://www.youtube.com/watch?v={VIDEO_ID}&list=PL123") == VIDEO_ID


@pytest.mark.parametrize("url", [
    "",
    "   ",
    "https://vimeo.com/123456",
    "https://www.youtube.com/watch?v=short",
    "not a url",
])
def test_rejected_input(url):
    assert not is_valid_youtube_url(url)
    assert extract_video_id(url) is None


@pytest.mark.parametrize("value", [None, 42, ["https://youtu.be/dQw4w9WgXcQ"]])
def test_non_string_input_never_raises(value):
    assert is_valid_youtube_url(value) is False
    assert extract_video_id(value) is None
    assert extract_playlist_id(value) is None


def test_playlist_id():
    url = f"https://www.youtube.com/watch?v={VIDEO_ID}&list=PLrAXtmErZgOeiKm4sgNOknGvNjby9efdf"
    assert extract_playlist_id(url) == "PLrAXtmErZgOeiKm4sgNOknGvNjby9efdf"
    assert extract_playlist_id(f"https://youtu.be/{VIDEO_ID}") is None


def test_parse_video_reference():
    ref = parse_video_reference("https://www.youtube.com/playlist?foo=1&list=PL_abc-1")
    assert ref.video_id is None
    assert ref.playlist_id == "PL_abc-1"

    ref = parse_video_reference(f"https://youtu.be/{VIDEO_ID}")
    assert ref.video_id == VIDEO_ID
    assert ref.raw_url == f"https://youtu.be/{VIDEO_ID}"


def test_is_video_id():
    assert is_video_id(VIDEO_ID)
    assert not is_video_id("too-short")
    assert not is_video_id(None)


DASHED_ID = "a-b_c-d_e-f"


@pytest.mark.parametrize("template", [
    "https://www.youtube.com/watch?v={}",
    "https://youtu.be/{}",
    "https://www.youtube.com/shorts/{}",
    "https://www.youtube.com/live/{}",
    "https://www.youtube.com/embed/{}",
    "https://www.youtube.com/v/{}",
    "https://www.youtube.com/watch?app=desktop&v={}",
    "https://m.youtube.com/watch?v={}",
])
def test_ids_with_dash_and_underscore(template):
    url = template.format(DASHED_ID)
    assert is_valid_youtube_url(url)
    assert extract_video_id(url) == DASHED_ID


@pytest.mark.parametrize("url,expected", [
    ("https://www.youtube.com/embed/AAAAAAAAAAA?v=BBBBBBBBBBB", "AAAAAAAAAAA"),
    ("https://www.youtube.com/shorts/AAAAAAAAAAA?v=BBBBBBBBBBB", "AAAAAAAAAAA"),
    ("https://youtu.be/AAAAAAAAAAA?v=BBBBBBBBBBB", "AAAAAAAAAAA"),
    ("https://www.youtube.com/attribution_link?a=x&v=BBBBBBBBBBB", "BBBBBBBBBBB"),
])
def test_specific_shapes_win_over_query_parameter(url, expected):
    assert extract_video_id(url) == expected


@pytest.mark.parametrize("url", [
    f"https://www.youtube.com/user/somebody/{DASHED_ID}",
    f"https://www.youtube.com/channel/x/{DASHED_ID}?feature=share",
])
def test_path_segment_fallback(url):
    assert extract_video_id(url) == DASHED_ID
