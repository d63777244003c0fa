import pytest

from tuberelay.utils.files import (
    format_duration,
    format_file_size,
    generate_filename,
    sanitize_filename,
)


def test_sanitize_filename():
    assert sanitize_filename('My <Video>: "Part" 1/2?') == "My Video Part 12"
    assert sanitize_filename("  lots   of\tspace  ") == "lots of space"
    assert len(sanitize_filename("x" * 500)) == 200


def test_generate_filename():
    assert generate_filename("Hello | World", "MP4") == "Hello World.mp4"
    assert generate_filename("???", "mp3") == "download.mp3"


@pytest.mark.parametrize("size,expected", [
    (0, "0 Bytes"),
    (None, "0 Bytes"),
    (512, "512 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (5 * 1024 * 1024, "5 MB"),
    (int(2.25 * 1024 ** 3), "2.25 GB"),
])
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


@pytest.mark.parametrize("seconds,expected", [
    (0, "0:00"),
    (59, "0:59"),
    (213, "3:33"),
    (3600, "1:00:00"),
    (3725.9, "1:02:05"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected
