"""Audio infrastructure - yt-dlp stream provider."""

from baguette_bot.infrastructure.audio.models import (
    AudioFormatInfo,
    CacheEntry,
    PlaylistEntryInfo,
    YtDlpOpts,
    YtDlpTrackInfo,
)
from baguette_bot.infrastructure.audio.ytdlp_provider import YtDlpStreamProvider

__all__ = [
    "AudioFormatInfo",
    "CacheEntry",
    "PlaylistEntryInfo",
    "YtDlpOpts",
    "YtDlpStreamProvider",
    "YtDlpTrackInfo",
]
