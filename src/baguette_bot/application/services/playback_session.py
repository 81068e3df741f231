"""Per-guild playback session driving the sequential-play state machine.

Every trigger that may move the queue forward (an enqueue while idle, an
explicit ``play()``, and the sink's idle/error notifications) is posted to a
per-session mailbox and consumed by a single worker task, so the queue is
only ever advanced by one coroutine at a time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Final

from ...domain.music.value_objects import PlaybackControls, PlaybackState, SinkEvent, SinkStatus
from ...domain.shared.exceptions import (
    FetchError,
    InvalidOperationError,
    NothingPlayingError,
    QueueFullError,
    SessionClosedError,
    SinkError,
)
from ...domain.shared.messages import DiscordUIMessages, LogTemplates
from .fetch_retry import fetch_with_retry

if TYPE_CHECKING:
    from ...config.settings import PlaybackSettings
    from ...domain.music.entities import Track
    from ...domain.music.value_objects import AudioStream
    from ..interfaces.audio_sink import AudioSink
    from ..interfaces.control_surface import ControlSurface
    from ..interfaces.stream_provider import StreamProvider

logger = logging.getLogger(__name__)

_ADVANCE: Final = "advance"

Message = str | SinkEvent


class PlaybackSession:
    """One guild's queue, its sink and the state machine between them.

    ``queue[0]`` is the track being rendered while the session is PLAYING or
    PAUSED. It is popped only when the sink reports that rendering ended, or
    immediately when fetching it fails for good.
    """

    def __init__(
        self,
        guild_id: int,
        sink: AudioSink,
        stream_provider: StreamProvider,
        settings: PlaybackSettings,
        *,
        control_surface: ControlSurface | None = None,
        on_close: Callable[[PlaybackSession], None] | None = None,
    ) -> None:
        self._guild_id = guild_id
        self._sink = sink
        self._provider = stream_provider
        self._settings = settings
        self._control_surface = control_surface
        self._on_close = on_close

        self._queue: list[Track] = []
        self._state = PlaybackState.IDLE
        self._render_id: int | None = None
        self._closed = False
        self._transport_released = False

        self._mailbox: asyncio.Queue[Message] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self._advance_pending = False

        self._sink.set_event_listener(self._on_sink_event)

    def __repr__(self) -> str:
        return (
            f"PlaybackSession(guild_id={self._guild_id}, state={self._state.value}, "
            f"queue={len(self._queue)}, closed={self._closed})"
        )

    # ── Read-only views ────────────────────────────────────────────

    @property
    def guild_id(self) -> int:
        return self._guild_id

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def queue(self) -> tuple[Track, ...]:
        return tuple(self._queue)

    @property
    def current_track(self) -> Track | None:
        """The track at the front while it is being rendered."""
        if self._state.is_active and self._queue:
            return self._queue[0]
        return None

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def control_surface(self) -> ControlSurface | None:
        return self._control_surface

    def attach_control_surface(self, surface: ControlSurface | None) -> None:
        self._control_surface = surface

    # ── Queue operations ───────────────────────────────────────────

    def enqueue(self, track: Track) -> int:
        """Append a track and return its 0-based queue position.

        Starts playback when the session is idle and this is the only track.
        """
        self._ensure_open("enqueue")
        self._ensure_capacity(1)

        self._queue.append(track)
        position = len(self._queue) - 1
        logger.debug(LogTemplates.SESSION_ENQUEUED, track.locator, position, self._guild_id)

        if self._state is PlaybackState.IDLE and len(self._queue) == 1:
            self._request_advance()
        return position

    def enqueue_batch(self, tracks: Iterable[Track]) -> int:
        """Append several tracks, starting playback at most once."""
        self._ensure_open("enqueue")
        batch = list(tracks)
        self._ensure_capacity(len(batch))

        was_idle = self._state is PlaybackState.IDLE
        self._queue.extend(batch)
        logger.debug(LogTemplates.SESSION_ENQUEUED_BATCH, len(batch), self._guild_id)

        if was_idle and batch:
            self._request_advance()
        return len(batch)

    def play(self) -> None:
        """Start playing the queue if the session is idle."""
        self._ensure_open("play")
        if self._state is PlaybackState.IDLE:
            self._request_advance()

    async def skip(self) -> None:
        """Stop the current render; the sink's idle notification pops the track."""
        self._ensure_open("skip")
        if not self._state.is_active:
            raise NothingPlayingError("skip")
        await self._sink.stop()

    async def pause(self) -> None:
        self._ensure_open("pause")
        if self._state is not PlaybackState.PLAYING:
            raise NothingPlayingError("pause")
        self._transition(PlaybackState.PAUSED)
        try:
            await self._sink.pause()
        except Exception:
            self._transition(PlaybackState.PLAYING)
            raise

    async def resume(self) -> None:
        self._ensure_open("resume")
        if self._state is not PlaybackState.PAUSED:
            raise NothingPlayingError("resume")
        self._transition(PlaybackState.PLAYING)
        try:
            await self._sink.resume()
        except Exception:
            self._transition(PlaybackState.PAUSED)
            raise

    async def toggle_pause(self) -> PlaybackState:
        """Pause when playing, resume when paused. Returns the new state."""
        if self._state is PlaybackState.PAUSED:
            await self.resume()
        else:
            await self.pause()
        return self._state

    async def stop(self) -> None:
        """Stop playback, release the voice transport and end the session."""
        self._ensure_open("stop")
        self._close()

        if self._worker is not None and self._worker is not asyncio.current_task():
            self._worker.cancel()
        self._discard_pending_messages()

        try:
            await self._sink.stop()
        except Exception:
            logger.exception(LogTemplates.SINK_STOP_FAILED, self._guild_id)
        await self._release_transport()
        logger.info(LogTemplates.SESSION_STOPPED, self._guild_id)

    async def drain(self) -> None:
        """Wait until every trigger posted so far has been processed."""
        await self._mailbox.join()

    # ── Mailbox ────────────────────────────────────────────────────

    def _request_advance(self) -> None:
        if self._advance_pending:
            return
        self._advance_pending = True
        self._post(_ADVANCE)

    def _on_sink_event(self, event: SinkEvent) -> None:
        if self._closed:
            logger.debug(LogTemplates.SESSION_STALE_EVENT, event.kind.value, self._guild_id, "closed")
            return
        self._post(event)

    def _post(self, message: Message) -> None:
        self._mailbox.put_nowait(message)
        if self._worker is None:
            self._worker = asyncio.get_running_loop().create_task(
                self._run(), name=f"playback-session-{self._guild_id}"
            )

    async def _run(self) -> None:
        while not self._closed:
            message = await self._mailbox.get()
            try:
                if self._closed:
                    continue
                if message == _ADVANCE:
                    self._advance_pending = False
                    await self._advance()
                elif isinstance(message, SinkEvent):
                    await self._handle_sink_event(message)
            except Exception:
                logger.exception(LogTemplates.SESSION_WORKER_CRASHED, self._guild_id)
            finally:
                self._mailbox.task_done()
        self._discard_pending_messages()

    def _discard_pending_messages(self) -> None:
        while True:
            try:
                self._mailbox.get_nowait()
            except asyncio.QueueEmpty:
                return
            self._mailbox.task_done()

    # ── State machine ──────────────────────────────────────────────

    async def _handle_sink_event(self, event: SinkEvent) -> None:
        if not self._state.is_active or not self._queue:
            logger.debug(
                LogTemplates.SESSION_STALE_EVENT, event.kind.value, self._guild_id, self._state.value
            )
            return

        if event.render_id is not None and event.render_id != self._render_id:
            logger.debug(
                LogTemplates.SESSION_ABANDONED_RENDER_EVENT,
                event.kind.value,
                event.render_id,
                self._guild_id,
                self._render_id,
            )
            return

        finished = self._queue.pop(0)
        if event.is_error:
            logger.error(LogTemplates.SESSION_SINK_ERROR, self._guild_id, event.details)
        else:
            logger.info(LogTemplates.SESSION_TRACK_FINISHED, finished.display_title, self._guild_id)

        self._transition(PlaybackState.IDLE)
        await self._advance()

    async def _advance(self) -> None:
        if self._state is not PlaybackState.IDLE:
            logger.debug(LogTemplates.SESSION_ADVANCE_SKIPPED, self._guild_id, self._state.value)
            return

        while not self._closed:
            if not self._queue:
                logger.info(LogTemplates.SESSION_QUEUE_EMPTY, self._guild_id)
                self._close()
                await self._release_transport()
                return

            track = self._queue[0]
            self._transition(PlaybackState.FETCHING)
            logger.info(LogTemplates.SESSION_ATTEMPTING, track.locator, self._guild_id)

            try:
                started = await self._start_track(track)
            except (FetchError, SinkError) as exc:
                logger.warning(
                    LogTemplates.SESSION_TRACK_DISCARDED, track.locator, self._guild_id, exc
                )
                if self._closed:
                    return
                self._queue.pop(0)
                self._transition(PlaybackState.IDLE)
                continue

            if started:
                self._transition(PlaybackState.PLAYING)
                logger.info(LogTemplates.SESSION_NOW_PLAYING, track.display_title, self._guild_id)
                await self._announce(track)
            return

    async def _start_track(self, track: Track) -> bool:
        """Fetch and hand the front track to the sink.

        Returns False when the session was stopped while waiting, in which
        case the fetched stream is dropped unplayed.
        """
        stream = await fetch_with_retry(
            self._provider.fetch_stream,
            track.locator,
            attempts=self._settings.fetch_attempts,
            delay_seconds=self._settings.fetch_retry_delay_seconds,
        )
        if self._closed:
            logger.debug(LogTemplates.SESSION_RESULT_DISCARDED, self._guild_id)
            return False

        title = await self._fetch_title(track.locator)
        if self._closed:
            logger.debug(LogTemplates.SESSION_RESULT_DISCARDED, self._guild_id)
            return False
        if not track.is_resolved:
            track.mark_resolved(title)

        await self._hand_to_sink(stream)
        return not self._closed

    async def _fetch_title(self, locator: str) -> str:
        try:
            return await self._provider.fetch_metadata(locator)
        except FetchError as exc:
            logger.warning(LogTemplates.FETCH_METADATA_FAILED, locator, exc)
            raise
        except Exception as exc:
            logger.warning(LogTemplates.FETCH_METADATA_FAILED, locator, exc)
            raise FetchError(locator, str(exc)) from exc

    async def _hand_to_sink(self, stream: AudioStream) -> None:
        try:
            self._render_id = await self._sink.play(stream)
        except SinkError:
            raise
        except Exception as exc:
            raise SinkError(str(exc) or type(exc).__name__) from exc

        try:
            await self._sink.subscribe_transport()
        except Exception as exc:
            self._render_id = None
            if self._sink.status is not SinkStatus.IDLE:
                try:
                    await self._sink.stop()
                except Exception:
                    logger.exception(LogTemplates.SINK_STOP_FAILED, self._guild_id)
            if isinstance(exc, SinkError):
                raise
            raise SinkError(str(exc) or type(exc).__name__) from exc

    async def _announce(self, track: Track) -> None:
        surface = self._control_surface
        if surface is None:
            return
        try:
            await surface.post_or_update(
                DiscordUIMessages.NOW_PLAYING.format(title=track.display_title),
                PlaybackControls.default(),
            )
        except Exception as exc:
            logger.warning(LogTemplates.CONTROL_SURFACE_UPDATE_FAILED, self._guild_id, exc)

    # ── Lifecycle helpers ──────────────────────────────────────────

    def _transition(self, target: PlaybackState) -> None:
        if not self._state.can_transition_to(target):
            raise InvalidOperationError(
                operation=f"transition to {target.value}", current_state=self._state.value
            )
        self._state = target

    def _ensure_open(self, operation: str) -> None:
        if self._closed:
            raise SessionClosedError(self._guild_id, operation)

    def _ensure_capacity(self, incoming: int) -> None:
        limit = self._settings.max_queue_size
        if limit is not None and len(self._queue) + incoming > limit:
            raise QueueFullError(limit)

    def _close(self) -> None:
        self._closed = True
        self._sink.set_event_listener(None)
        if self._on_close is not None:
            self._on_close(self)

    async def _release_transport(self) -> None:
        if self._transport_released:
            return
        self._transport_released = True
        try:
            await self._sink.disconnect()
        except Exception:
            logger.exception(LogTemplates.SESSION_TRANSPORT_RELEASE_FAILED, self._guild_id)
