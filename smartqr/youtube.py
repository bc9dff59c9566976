"""
YouTube video-ID extraction.

Backs both the youtube builder (canonical watch URL) and the classifier
(video_id field). Both must go through extract_youtube_id().
"""

from __future__ import annotations

import re
from typing import Optional


_VIDEO_ID = r"([a-zA-Z0-9_-]{11})"

# Order matters: the first match wins.
_PATTERNS = (
    re.compile(
        r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/|youtube\.com/shorts/)"
        + _VIDEO_ID
    ),
    re.compile(r"youtube\.com/watch\?.*v=" + _VIDEO_ID),
)

WATCH_URL = "https://youtube.com/watch?v="


def extract_youtube_id(url: str) -> Optional[str]:
    if not url:
        return None
    for pattern in _PATTERNS:
        match = pattern.search(url)
        if match and match.group(1):
            return match.group(1)
    return None
