import asyncio

import pytest

from baguette_bot.application.interfaces.audio_sink import AudioSink
from baguette_bot.application.interfaces.control_surface import ControlSurface
from baguette_bot.application.interfaces.stream_provider import StreamProvider
from baguette_bot.domain.music.value_objects import AudioStream, SinkEvent, SinkStatus
from baguette_bot.domain.shared.exceptions import ControlSurfaceError, FetchError, SinkError

# ============================================================================
# Port Fakes
# ============================================================================


class FakeSink(AudioSink):
    """In-memory sink that records calls and reports IDLE when stopped."""

    def __init__(self) -> None:
        self.listener = None
        self.played: list[AudioStream] = []
        self.pause_calls = 0
        self.resume_calls = 0
        self.stop_calls = 0
        self.subscribe_calls = 0
        self.disconnect_calls = 0
        self.fail_play = False
        self.fail_subscribe = False
        self.subscribe_failures = 0
        self.render_id = 0
        self._status = SinkStatus.IDLE

    @property
    def status(self) -> SinkStatus:
        return self._status

    def set_event_listener(self, listener) -> None:
        self.listener = listener

    async def play(self, stream: AudioStream) -> int:
        if self.fail_play:
            raise SinkError("player refused the stream")
        self.played.append(stream)
        self.render_id += 1
        self._status = SinkStatus.PLAYING
        return self.render_id

    async def pause(self) -> None:
        self.pause_calls += 1
        self._status = SinkStatus.PAUSED

    async def resume(self) -> None:
        self.resume_calls += 1
        self._status = SinkStatus.PLAYING

    async def stop(self) -> None:
        self.stop_calls += 1
        was_rendering = self._status is not SinkStatus.IDLE
        self._status = SinkStatus.IDLE
        if was_rendering:
            self._emit(SinkEvent.idle(self.render_id))

    async def subscribe_transport(self) -> None:
        self.subscribe_calls += 1
        if self.subscribe_failures > 0:
            self.subscribe_failures -= 1
            raise SinkError("voice transport hiccup")
        if self.fail_subscribe:
            raise SinkError("voice transport gone")

    async def disconnect(self) -> None:
        self.disconnect_calls += 1

    def emit_idle(self) -> None:
        """Simulate the current item finishing naturally."""
        self._status = SinkStatus.IDLE
        self._emit(SinkEvent.idle(self.render_id))

    def emit_error(self, details: str) -> None:
        self._status = SinkStatus.IDLE
        self._emit(SinkEvent.error(details, self.render_id))

    def _emit(self, event: SinkEvent) -> None:
        if self.listener is not None:
            self.listener(event)


class FakeStreamProvider(StreamProvider):
    """Provider serving ``stream://<locator>`` for every locator not marked as failing."""

    def __init__(self, *, failing=(), titles=None, gate: asyncio.Event | None = None) -> None:
        self.failing = set(failing)
        self.failing_metadata: set[str] = set()
        self.titles = dict(titles or {})
        self.gate = gate
        self.fetch_started = asyncio.Event()
        self.stream_calls: list[str] = []
        self.metadata_calls: list[str] = []

    def attempts(self, locator: str) -> int:
        return self.stream_calls.count(locator)

    async def fetch_stream(self, locator: str) -> AudioStream:
        self.stream_calls.append(locator)
        self.fetch_started.set()
        if self.gate is not None:
            await self.gate.wait()
        if locator in self.failing:
            raise FetchError(locator, "HTTP 403")
        return AudioStream(url=f"stream://{locator}")

    async def fetch_metadata(self, locator: str) -> str:
        self.metadata_calls.append(locator)
        if locator in self.failing_metadata:
            raise RuntimeError("metadata unavailable")
        return self.titles.get(locator, f"Title of {locator}")


class FakeControlSurface(ControlSurface):
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.posts: list[tuple[str, object]] = []

    async def post_or_update(self, text, controls):
        self.posts.append((text, controls))
        if self.fail:
            raise ControlSurfaceError("message deleted")
        return "message-handle"


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fake_sink():
    return FakeSink()


@pytest.fixture
def fake_provider():
    return FakeStreamProvider()


@pytest.fixture
def fake_surface():
    return FakeControlSurface()


@pytest.fixture
def playback_settings():
    """Playback settings with the retry delay disabled."""
    from baguette_bot.config.settings import PlaybackSettings

    return PlaybackSettings(fetch_attempts=3, fetch_retry_delay_seconds=0)


@pytest.fixture
def registry(fake_provider, playback_settings):
    from baguette_bot.application.services.session_registry import SessionRegistry

    return SessionRegistry(fake_provider, playback_settings)


@pytest.fixture
def make_session(fake_sink, fake_provider, playback_settings):
    """Factory building a standalone session around the shared fakes."""
    from baguette_bot.application.services.playback_session import PlaybackSession

    def _make(guild_id: int = 42, **kwargs):
        return PlaybackSession(
            guild_id,
            kwargs.pop("sink", fake_sink),
            kwargs.pop("provider", fake_provider),
            kwargs.pop("settings", playback_settings),
            **kwargs,
        )

    return _make
