import pytest

from chunked_transcriber.domain import normalize_mime_type


@pytest.mark.parametrize(
    "file_name,declared,expected",
    [
        ("call.m4a", "audio/x-m4a", "audio/mp4"),
        ("call.M4A", "", "audio/mp4"),
        ("song.mp3", "audio/mpeg", "audio/mp3"),
        ("meeting.wav", "audio/wav", "audio/wav"),
        ("video.mp4", "video/mp4", "video/mp4"),
        ("unknown", "", "audio/mp4"),
        (None, None, "audio/mp4"),
    ],
)
def test_normalize_mime_type(file_name, declared, expected):
    assert normalize_mime_type(file_name, declared) == expected
