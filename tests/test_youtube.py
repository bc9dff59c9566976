import pytest

from smartqr.builders import build_youtube
from smartqr.youtube import extract_youtube_id


@pytest.mark.parametrize(
    "url",
    [
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtube.com/embed/dQw4w9WgXcQ",
        "https://youtube.com/v/dQw4w9WgXcQ",
        "https://youtube.com/shorts/dQw4w9WgXcQ",
        "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
    ],
)
def test_extract_youtube_id_known_forms(url: str) -> None:
    assert extract_youtube_id(url) == "dQw4w9WgXcQ"


def test_extract_youtube_id_no_match() -> None:
    assert extract_youtube_id("https://example.com") is None
    assert extract_youtube_id("https://youtu.be/short") is None
    assert extract_youtube_id("") is None


def test_builder_and_extractor_agree() -> None:
    src = "https://youtu.be/dQw4w9WgXcQ?t=42"
    canonical = build_youtube(src)
    assert canonical == "https://youtube.com/watch?v=dQw4w9WgXcQ"
    assert extract_youtube_id(canonical) == extract_youtube_id(src)


def test_build_youtube_passthrough_without_id() -> None:
    assert build_youtube("https://vimeo.com/12345") == "https://vimeo.com/12345"
