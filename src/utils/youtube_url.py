"""YouTube URL helpers shared by the trailer sources."""

import re
from typing import Optional

WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"

# Full watch form or youtu.be short link, followed by the 11-char video id
YOUTUBE_URL_RE = re.compile(
    r"(https?://)?(www\.)?(youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)

_VIDEO_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")


def extract_video_id(text: str) -> Optional[str]:
    """Return the video id of the first YouTube URL found in text."""
    if not text:
        return None
    match = YOUTUBE_URL_RE.search(text)
    return match.group(4) if match else None


def watch_url(video_id: str) -> str:
    """Build the canonical watch URL for a video id.

    Args:
        video_id: 11-character YouTube video id

    Returns:
        Canonical https://www.youtube.com/watch?v=... URL

    Raises:
        ValueError: If the id is not a well-formed YouTube video id
    """
    if not _VIDEO_ID_RE.match(video_id or ""):
        raise ValueError(f"Invalid YouTube video id: {video_id!r}")
    return WATCH_URL_TEMPLATE.format(video_id=video_id)


def is_video_url(url: str) -> bool:
    """Check whether url is a recognizable YouTube watch or short-link URL."""
    if not url or not url.strip():
        return False
    return YOUTUBE_URL_RE.match(url.strip()) is not None
