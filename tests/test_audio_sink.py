"""Tests for DiscordAudioSink - FFmpeg playback on a discord.py VoiceClient."""

import asyncio
import shlex
from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest

from baguette_bot.config.settings import AudioSettings
from baguette_bot.domain.music.value_objects import AudioStream, SinkEvent, SinkStatus
from baguette_bot.domain.shared.exceptions import SinkError
from baguette_bot.infrastructure.discord.audio_sink import DiscordAudioSink, build_before_options

FFMPEG_PATH = "baguette_bot.infrastructure.discord.audio_sink.discord.FFmpegPCMAudio"
VOLUME_PATH = "baguette_bot.infrastructure.discord.audio_sink.discord.PCMVolumeTransformer"


@pytest.fixture
def voice_client():
    vc = MagicMock(spec=discord.VoiceClient)
    vc.guild = MagicMock(id=1234)
    vc.is_connected.return_value = True
    vc.is_playing.return_value = False
    vc.is_paused.return_value = False
    vc.disconnect = AsyncMock()
    return vc


@pytest.fixture
def sink(voice_client):
    return DiscordAudioSink(voice_client, AudioSettings(default_volume=0.7))


@pytest.fixture
def ffmpeg():
    with patch(FFMPEG_PATH) as mock_ffmpeg, patch(VOLUME_PATH) as mock_volume:
        yield mock_ffmpeg, mock_volume


class TestBuildBeforeOptions:
    def test_no_headers_keeps_base(self):
        assert build_before_options("-reconnect 1", {}) == "-reconnect 1"

    def test_headers_are_quoted(self):
        options = build_before_options("-reconnect 1", {"Cookie": "SID=a b"})

        assert options.startswith("-reconnect 1 -headers ")
        assert shlex.split(options)[-1] == "Cookie: SID=a b\r\n"


class TestPlay:
    async def test_starts_ffmpeg_source(self, sink, voice_client, ffmpeg):
        """Should wrap the stream in an FFmpeg source at the configured volume."""
        mock_ffmpeg, mock_volume = ffmpeg

        await sink.play(AudioStream(url="https://cdn.example/a.webm"))

        assert mock_ffmpeg.call_args.args[0] == "https://cdn.example/a.webm"
        assert mock_ffmpeg.call_args.kwargs["options"] == "-vn"
        assert mock_volume.call_args.kwargs["volume"] == 0.7
        voice_client.play.assert_called_once()
        assert voice_client.play.call_args.args[0] is mock_volume.return_value

    async def test_forwards_stream_headers(self, sink, ffmpeg):
        mock_ffmpeg, _ = ffmpeg

        await sink.play(AudioStream(url="https://cdn.example/a", http_headers={"Cookie": "x=1"}))

        assert "-headers" in mock_ffmpeg.call_args.kwargs["before_options"]

    async def test_not_connected_raises(self, sink, voice_client, ffmpeg):
        voice_client.is_connected.return_value = False

        with pytest.raises(SinkError):
            await sink.play(AudioStream(url="https://cdn.example/a"))

        voice_client.play.assert_not_called()

    async def test_client_exception_becomes_sink_error(self, sink, voice_client, ffmpeg):
        """Should clean up the FFmpeg process when the voice client refuses the source."""
        mock_ffmpeg, _ = ffmpeg
        voice_client.play.side_effect = discord.ClientException("Already playing audio.")

        with pytest.raises(SinkError) as exc_info:
            await sink.play(AudioStream(url="https://cdn.example/a"))

        assert exc_info.value.details == "Already playing audio."
        mock_ffmpeg.return_value.cleanup.assert_called_once()


class TestEvents:
    async def _after_callback(self, sink, voice_client):
        await sink.play(AudioStream(url="https://cdn.example/a"))
        return voice_client.play.call_args.kwargs["after"]

    async def test_finish_emits_idle(self, sink, voice_client, ffmpeg):
        """Should deliver IDLE on the event loop when playback finishes."""
        events = []
        sink.set_event_listener(events.append)
        after = await self._after_callback(sink, voice_client)

        after(None)
        await asyncio.sleep(0)

        assert events == [SinkEvent.idle(render_id=1)]

    async def test_error_emits_error(self, sink, voice_client, ffmpeg):
        events = []
        sink.set_event_listener(events.append)
        after = await self._after_callback(sink, voice_client)

        after(RuntimeError("ffmpeg died"))
        await asyncio.sleep(0)

        assert events == [SinkEvent.error("ffmpeg died", render_id=1)]

    async def test_events_from_worker_thread(self, sink, voice_client, ffmpeg):
        """Should marshal events from the player thread onto the loop."""
        events = []
        sink.set_event_listener(events.append)
        after = await self._after_callback(sink, voice_client)

        await asyncio.to_thread(after, None)
        await asyncio.sleep(0)

        assert events == [SinkEvent.idle(render_id=1)]

    async def test_each_render_stamps_its_own_id(self, sink, voice_client, ffmpeg):
        """Should tag a late event from an earlier render with that render's id."""
        events = []
        sink.set_event_listener(events.append)

        first = await sink.play(AudioStream(url="https://cdn.example/a"))
        first_after = voice_client.play.call_args.kwargs["after"]
        second = await sink.play(AudioStream(url="https://cdn.example/b"))

        first_after(None)
        await asyncio.sleep(0)

        assert (first, second) == (1, 2)
        assert events == [SinkEvent.idle(render_id=1)]

    async def test_no_listener_drops_event(self, sink, voice_client, ffmpeg):
        after = await self._after_callback(sink, voice_client)
        sink.set_event_listener(None)

        after(None)
        await asyncio.sleep(0)


class TestControls:
    async def test_status(self, sink, voice_client):
        assert sink.status is SinkStatus.IDLE

        voice_client.is_playing.return_value = True
        assert sink.status is SinkStatus.PLAYING

        voice_client.is_paused.return_value = True
        assert sink.status is SinkStatus.PAUSED

    async def test_pause_only_when_playing(self, sink, voice_client):
        await sink.pause()
        voice_client.pause.assert_not_called()

        voice_client.is_playing.return_value = True
        await sink.pause()
        voice_client.pause.assert_called_once()

    async def test_resume_only_when_paused(self, sink, voice_client):
        await sink.resume()
        voice_client.resume.assert_not_called()

        voice_client.is_paused.return_value = True
        await sink.resume()
        voice_client.resume.assert_called_once()

    async def test_stop_when_playing_or_paused(self, sink, voice_client):
        await sink.stop()
        voice_client.stop.assert_not_called()

        voice_client.is_paused.return_value = True
        await sink.stop()
        voice_client.stop.assert_called_once()

    async def test_subscribe_requires_connection(self, sink, voice_client):
        await sink.subscribe_transport()

        voice_client.is_connected.return_value = False
        with pytest.raises(SinkError):
            await sink.subscribe_transport()

    async def test_disconnect_forces(self, sink, voice_client):
        await sink.disconnect()

        voice_client.disconnect.assert_awaited_once_with(force=True)

    def test_guild_id(self, sink):
        assert sink.guild_id == 1234
