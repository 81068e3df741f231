"""Registry enforcing at most one playback session per guild."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.shared.exceptions import (
    SessionAlreadyExistsError,
    SessionClosedError,
    SessionNotFoundError,
)
from ...domain.shared.messages import LogTemplates
from .playback_session import PlaybackSession

if TYPE_CHECKING:
    from ...config.settings import PlaybackSettings
    from ..interfaces.audio_sink import AudioSink
    from ..interfaces.control_surface import ControlSurface
    from ..interfaces.stream_provider import StreamProvider

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Maps guild IDs to their live ``PlaybackSession``.

    Never replaces a session silently: callers check ``get_session`` first.
    Sessions remove themselves when they stop or run out of tracks.
    """

    def __init__(self, stream_provider: StreamProvider, settings: PlaybackSettings) -> None:
        self._stream_provider = stream_provider
        self._settings = settings
        self._sessions: dict[int, PlaybackSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, guild_id: object) -> bool:
        return guild_id in self._sessions

    def create_session(
        self,
        guild_id: int,
        sink: AudioSink,
        *,
        control_surface: ControlSurface | None = None,
    ) -> PlaybackSession:
        if guild_id in self._sessions:
            raise SessionAlreadyExistsError(guild_id)

        session = PlaybackSession(
            guild_id,
            sink,
            self._stream_provider,
            self._settings,
            control_surface=control_surface,
            on_close=self._forget,
        )
        self._sessions[guild_id] = session
        logger.info(LogTemplates.SESSION_CREATED, guild_id)
        return session

    def get_session(self, guild_id: int) -> PlaybackSession | None:
        return self._sessions.get(guild_id)

    def require_session(self, guild_id: int) -> PlaybackSession:
        session = self._sessions.get(guild_id)
        if session is None:
            raise SessionNotFoundError(guild_id)
        return session

    def remove_session(self, guild_id: int) -> None:
        """Drop the guild's session from the registry. Idempotent."""
        if self._sessions.pop(guild_id, None) is not None:
            logger.info(LogTemplates.SESSION_REMOVED, guild_id)

    def active_guild_ids(self) -> list[int]:
        return list(self._sessions)

    async def shutdown(self) -> None:
        """Stop every live session."""
        for session in list(self._sessions.values()):
            try:
                await session.stop()
            except SessionClosedError:
                continue
        self._sessions.clear()

    def _forget(self, session: PlaybackSession) -> None:
        if self._sessions.get(session.guild_id) is session:
            self.remove_session(session.guild_id)
