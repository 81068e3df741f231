"""YouTube URL helpers used by the command layer."""

from __future__ import annotations

import re
from typing import Final
from urllib.parse import parse_qs, urlsplit

WATCH_URL: Final = "https://www.youtube.com/watch?v={video_id}"

YOUTUBE_HOSTS: Final = frozenset(
    {"youtube.com", "www.youtube.com", "m.youtube.com", "music.youtube.com"}
)
SHORT_HOSTS: Final = frozenset({"youtu.be", "www.youtu.be"})

VIDEO_ID_PATTERN: Final = re.compile(r"^[A-Za-z0-9_-]{11}$")


def canonicalize_locator(url: str) -> str:
    """Rewrite a YouTube video URL to ``https://www.youtube.com/watch?v=<id>``.

    ``youtu.be/<id>`` links and ``youtube.com`` links carrying a ``v``
    parameter are rewritten, dropping playlist and timestamp parameters.
    Anything else, including strings that do not parse as URLs, is returned
    unchanged.
    """
    try:
        parsed = urlsplit(url.strip())
        host = (parsed.hostname or "").lower()
    except ValueError:
        return url

    if host in SHORT_HOSTS:
        video_id = parsed.path.lstrip("/")
        if video_id:
            return WATCH_URL.format(video_id=video_id)
        return url

    if host in YOUTUBE_HOSTS:
        if parsed.path.startswith("/shorts/"):
            video_id = parsed.path.removeprefix("/shorts/").strip("/")
            if video_id:
                return WATCH_URL.format(video_id=video_id)
        video_ids = parse_qs(parsed.query).get("v")
        if video_ids and video_ids[0]:
            return WATCH_URL.format(video_id=video_ids[0])

    return url


def extract_video_id(url: str) -> str | None:
    canonical = canonicalize_locator(url)
    try:
        parsed = urlsplit(canonical)
    except ValueError:
        return None
    if (parsed.hostname or "").lower() not in YOUTUBE_HOSTS:
        return None
    video_ids = parse_qs(parsed.query).get("v")
    if not video_ids or not VIDEO_ID_PATTERN.match(video_ids[0]):
        return None
    return video_ids[0]


def is_supported_url(url: str) -> bool:
    """True for http(s) YouTube links that point at a single video."""
    if not url.strip().lower().startswith(("http://", "https://")):
        return False
    return extract_video_id(url) is not None


def is_playlist_url(url: str) -> bool:
    """True for http(s) YouTube links carrying a ``list`` parameter."""
    try:
        parsed = urlsplit(url.strip())
        host = (parsed.hostname or "").lower()
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https"):
        return False
    if host not in YOUTUBE_HOSTS and host not in SHORT_HOSTS:
        return False
    list_ids = parse_qs(parsed.query).get("list")
    return bool(list_ids and list_ids[0])
