"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the stream provider, session registry and
voice connector. Components are created on-demand and cached for reuse
throughout the application.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.interfaces.stream_provider import PlaylistExtractor, StreamProvider
    from ..application.services.session_registry import SessionRegistry
    from ..infrastructure.audio.ytdlp_provider import YtDlpStreamProvider
    from ..infrastructure.discord.voice_connector import DiscordVoiceConnector
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # Infrastructure adapters
    _ytdlp_provider: YtDlpStreamProvider | None = None
    _voice_connector: DiscordVoiceConnector | None = None

    # Application services
    _session_registry: SessionRegistry | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Infrastructure Adapters ===

    @property
    def stream_provider(self) -> StreamProvider:
        """Get the stream provider used by playback sessions."""
        return self._get_ytdlp_provider()

    @property
    def playlist_extractor(self) -> PlaylistExtractor:
        """Get the playlist extractor (the same yt-dlp instance)."""
        return self._get_ytdlp_provider()

    def _get_ytdlp_provider(self) -> YtDlpStreamProvider:
        if self._ytdlp_provider is None:
            from ..infrastructure.audio.ytdlp_provider import YtDlpStreamProvider

            self._ytdlp_provider = YtDlpStreamProvider(self.settings.audio)
        return self._ytdlp_provider

    @property
    def voice_connector(self) -> DiscordVoiceConnector:
        """Get the voice connector."""
        if self._voice_connector is None:
            from ..infrastructure.discord.voice_connector import DiscordVoiceConnector

            self._voice_connector = DiscordVoiceConnector(self.settings.audio)
        return self._voice_connector

    # === Application Services ===

    @property
    def session_registry(self) -> SessionRegistry:
        """Get the per-guild session registry."""
        if self._session_registry is None:
            from ..application.services.session_registry import SessionRegistry

            self._session_registry = SessionRegistry(
                self.stream_provider, self.settings.playback
            )
        return self._session_registry

    # === Lifecycle ===

    async def shutdown(self) -> None:
        """Stop every live playback session."""
        if self._session_registry is not None:
            await self._session_registry.shutdown()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
