"""StreamProvider and PlaylistExtractor implementation backed by yt-dlp."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, cast

from yt_dlp import YoutubeDL

from baguette_bot.application.interfaces.stream_provider import (
    PlaylistExtractor,
    PlaylistInfo,
    StreamProvider,
)
from baguette_bot.config.settings import AudioSettings
from baguette_bot.domain.music.value_objects import AudioStream
from baguette_bot.domain.shared.exceptions import FetchError
from baguette_bot.domain.shared.messages import ErrorMessages, LogTemplates
from baguette_bot.infrastructure.audio.models import (
    CACHE_MAX_SIZE,
    LOG_URL_TRUNCATE,
    AudioFormatInfo,
    CacheEntry,
    PlaylistEntryInfo,
    YtDlpOpts,
    YtDlpTrackInfo,
)

logger = logging.getLogger(__name__)

# ── Module-level state ─────────────────────────────────────────────────

_info_cache: dict[str, CacheEntry] = {}


def clear_info_cache() -> None:
    _info_cache.clear()


class YtDlpStreamProvider(StreamProvider, PlaylistExtractor):
    """Extracts direct audio URLs and titles for video locators.

    One extraction serves both ``fetch_stream`` and ``fetch_metadata`` for a
    locator while its cache entry is fresh. Failed extractions are never
    cached, so every retry hits yt-dlp again.
    """

    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()
        self._cache_ttl = self._settings.info_cache_ttl_seconds

        cookie = self._settings.cookie_header.get_secret_value()
        self._cookie_headers = {"Cookie": cookie} if cookie else {}

        self._base_opts = YtDlpOpts(
            format=self._settings.ytdlp_format,
            http_headers=self._cookie_headers or None,
        )

    def _get_opts(self, **overrides: Any) -> YtDlpOpts:
        if overrides:
            return self._base_opts.model_copy(update=overrides)
        return self._base_opts

    def _get_playlist_opts(self) -> YtDlpOpts:
        return self._get_opts(noplaylist=False, extract_flat="in_playlist", format=None)

    @staticmethod
    def _params(opts: YtDlpOpts) -> Any:
        return cast(Any, opts.model_dump(exclude_none=True))

    # ── Synchronous yt-dlp calls (run in a worker thread) ─────────────

    def _extract_info_sync(self, locator: str) -> YtDlpTrackInfo:
        now = time.time()
        cached = _info_cache.get(locator)
        if cached is not None:
            if now - cached.cached_at < self._cache_ttl:
                logger.debug(LogTemplates.CACHE_HIT_URL, locator[:LOG_URL_TRUNCATE])
                return cached.info
            _info_cache.pop(locator, None)

        logger.debug(LogTemplates.YTDLP_EXTRACTING, locator[:LOG_URL_TRUNCATE])
        try:
            with YoutubeDL(params=self._params(self._get_opts())) as ydl:
                data = ydl.extract_info(locator, download=False)
        except Exception as exc:
            raise FetchError(locator, str(exc)) from exc

        if not isinstance(data, dict):
            raise FetchError(locator, ErrorMessages.NO_INFO_FOR_LOCATOR.format(locator=locator))

        info = YtDlpTrackInfo.model_validate(dict(data))
        if self._cache_ttl > 0:
            _info_cache[locator] = CacheEntry(info=info, cached_at=now)
            self._evict_expired(now)
        return info

    def _evict_expired(self, now: float) -> None:
        if len(_info_cache) <= CACHE_MAX_SIZE:
            return
        expired = [k for k, entry in _info_cache.items() if now - entry.cached_at >= self._cache_ttl]
        for k in expired:
            _info_cache.pop(k, None)
        if expired:
            logger.debug(LogTemplates.CACHE_EXPIRED_CLEANED, len(expired))

    def _extract_playlist_sync(self, url: str) -> PlaylistInfo:
        try:
            with YoutubeDL(params=self._params(self._get_playlist_opts())) as ydl:
                data = ydl.extract_info(url, download=False)
        except Exception as exc:
            logger.exception(LogTemplates.YTDLP_FAILED_EXTRACT_PLAYLIST, url)
            raise FetchError(url, str(exc)) from exc

        entries = data.get("entries") if isinstance(data, dict) else None
        if not entries:
            raise FetchError(url, ErrorMessages.NOT_A_PLAYLIST.format(url=url))

        locators: list[str] = []
        for raw in entries:
            if not isinstance(raw, dict):
                continue
            locator = PlaylistEntryInfo.model_validate(raw).locator
            if locator:
                locators.append(locator)

        title = data.get("title") if isinstance(data.get("title"), str) else None
        return PlaylistInfo(title=title or url, locators=tuple(locators))

    # ── Format selection ──────────────────────────────────────────────

    @staticmethod
    def _select_format(formats: list[AudioFormatInfo]) -> AudioFormatInfo | None:
        """Prefer the last audio-only format, then the last one carrying audio."""
        audio_only = [f for f in formats if f.is_audio_only]
        if audio_only:
            return audio_only[-1]
        with_audio = [f for f in formats if f.has_audio]
        return with_audio[-1] if with_audio else None

    def _to_stream(self, locator: str, info: YtDlpTrackInfo) -> AudioStream:
        if info.url:
            headers = dict(info.http_headers)
            url = info.url
        else:
            fmt = self._select_format(info.formats)
            if fmt is None or fmt.url is None:
                raise FetchError(locator, ErrorMessages.NO_AUDIO_FORMAT.format(locator=locator))
            headers = {**info.http_headers, **fmt.http_headers}
            url = fmt.url

        headers.update(self._cookie_headers)
        return AudioStream(url=url, http_headers=headers)

    # ── Ports ─────────────────────────────────────────────────────────

    async def fetch_stream(self, locator: str) -> AudioStream:
        info = await asyncio.to_thread(self._extract_info_sync, locator)
        stream = self._to_stream(locator, info)
        logger.info(LogTemplates.FETCH_RESOLVED, info.title)
        return stream

    async def fetch_metadata(self, locator: str) -> str:
        info = await asyncio.to_thread(self._extract_info_sync, locator)
        return info.title

    async def extract_playlist(self, url: str) -> PlaylistInfo:
        return await asyncio.to_thread(self._extract_playlist_sync, url)
