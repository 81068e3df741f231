"""AudioSink implementation on top of a discord.py VoiceClient."""

from __future__ import annotations

import asyncio
import logging
import shlex
from typing import TYPE_CHECKING

import discord

from baguette_bot.application.interfaces.audio_sink import AudioSink, SinkEventListener
from baguette_bot.config.settings import AudioSettings
from baguette_bot.domain.music.value_objects import SinkEvent, SinkStatus
from baguette_bot.domain.shared.exceptions import SinkError
from baguette_bot.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ....domain.music.value_objects import AudioStream

logger = logging.getLogger(__name__)


def build_before_options(base: str, headers: dict[str, str]) -> str:
    """Append an FFmpeg ``-headers`` argument carrying the stream's HTTP headers."""
    if not headers:
        return base
    header_block = "".join(f"{key}: {value}\r\n" for key, value in headers.items())
    return f"{base} -headers {shlex.quote(header_block)}".strip()


class DiscordAudioSink(AudioSink):
    """Renders FFmpeg-decoded streams into one guild's voice connection.

    The voice client is both the player and the transport here, so
    ``subscribe_transport`` only verifies that the connection is live.
    """

    def __init__(self, voice_client: discord.VoiceClient, settings: AudioSettings | None = None) -> None:
        self._vc = voice_client
        self._settings = settings or AudioSettings()
        self._listener: SinkEventListener | None = None
        self._render_id = 0

    @property
    def guild_id(self) -> int:
        return self._vc.guild.id

    @property
    def voice_client(self) -> discord.VoiceClient:
        return self._vc

    @property
    def status(self) -> SinkStatus:
        if self._vc.is_paused():
            return SinkStatus.PAUSED
        if self._vc.is_playing():
            return SinkStatus.PLAYING
        return SinkStatus.IDLE

    def set_event_listener(self, listener: SinkEventListener | None) -> None:
        self._listener = listener

    async def play(self, stream: AudioStream) -> int:
        if not self._vc.is_connected():
            raise SinkError(ErrorMessages.SINK_NOT_CONNECTED)

        self._render_id += 1
        render_id = self._render_id
        loop = asyncio.get_running_loop()
        source = discord.FFmpegPCMAudio(
            stream.url,
            before_options=build_before_options(
                self._settings.ffmpeg_before_options, stream.http_headers
            ),
            options=self._settings.ffmpeg_options,
        )
        volume_source = discord.PCMVolumeTransformer(source, volume=self._settings.default_volume)

        def after_callback(error: Exception | None = None) -> None:
            event = (
                SinkEvent.error(str(error), render_id) if error else SinkEvent.idle(render_id)
            )
            try:
                loop.call_soon_threadsafe(self._emit, event)
            except RuntimeError:
                logger.debug(LogTemplates.SINK_TRACK_ENDED, self.guild_id, error)

        try:
            self._vc.play(volume_source, after=after_callback)
        except discord.ClientException as e:
            source.cleanup()
            raise SinkError(ErrorMessages.SINK_PLAY_FAILED, str(e)) from e

        logger.debug(LogTemplates.SINK_PLAYING, self.guild_id)
        return render_id

    async def pause(self) -> None:
        if self._vc.is_playing():
            self._vc.pause()
            logger.debug(LogTemplates.SINK_PAUSED, self.guild_id)

    async def resume(self) -> None:
        if self._vc.is_paused():
            self._vc.resume()
            logger.debug(LogTemplates.SINK_RESUMED, self.guild_id)

    async def stop(self) -> None:
        if self._vc.is_playing() or self._vc.is_paused():
            self._vc.stop()
            logger.debug(LogTemplates.SINK_STOPPED, self.guild_id)

    async def subscribe_transport(self) -> None:
        if not self._vc.is_connected():
            raise SinkError(ErrorMessages.SINK_NOT_CONNECTED)

    async def disconnect(self) -> None:
        await self._vc.disconnect(force=True)
        logger.info(LogTemplates.VOICE_DISCONNECTED, self.guild_id)

    def _emit(self, event: SinkEvent) -> None:
        logger.debug(LogTemplates.SINK_TRACK_ENDED, self.guild_id, event.details)
        if self._listener is None:
            logger.debug(LogTemplates.SINK_NO_LISTENER, self.guild_id)
            return
        self._listener(event)
