"""YouTube video ID and URL helpers."""

from typing import Optional
from urllib.parse import urlparse, parse_qs

from .logging import get_logger

logger = get_logger("youtube_utils")

VIDEO_ID_LENGTH = 11
SHORT_LINK_HOST = "youtu.be"
WATCH_HOSTS = ("youtube.com", "www.youtube.com")
EMBED_PREFIX = "/embed/"
SHORTS_PREFIX = "/shorts/"


def extract_video_id(url_or_id: Optional[str]) -> Optional[str]:
    """
    Extract a video ID from a bare ID or a YouTube URL.

    Recognized shapes: an 11 character bare ID, ``youtu.be/<id>``,
    ``youtube.com/watch?v=<id>``, ``youtube.com/embed/<id>`` and
    ``youtube.com/shorts/<id>`` (with or without ``www.``).

    Args:
        url_or_id: Raw value of the ``id`` query parameter

    Returns:
        Video ID if one can be derived, None otherwise
    """
    if not url_or_id:
        return None

    if len(url_or_id) == VIDEO_ID_LENGTH and "/" not in url_or_id and "?" not in url_or_id:
        return url_or_id

    try:
        url = urlparse(url_or_id)
        host = url.hostname
    except ValueError as e:
        logger.error(f"Invalid URL or ID format attempting to parse: {url_or_id} ({e})")
        return None

    video_id = None
    if host == SHORT_LINK_HOST:
        video_id = url.path[1:]
    elif host in WATCH_HOSTS:
        if url.path == "/watch":
            values = parse_qs(url.query).get("v")
            video_id = values[0] if values else None
        elif url.path.startswith(EMBED_PREFIX):
            video_id = url.path[len(EMBED_PREFIX):]
        elif url.path.startswith(SHORTS_PREFIX):
            video_id = url.path[len(SHORTS_PREFIX):]

    return video_id or None


def build_watch_url(video_id: str) -> str:
    """Canonical watch URL for a video ID."""
    return f"https://www.youtube.com/watch?v={video_id}"
