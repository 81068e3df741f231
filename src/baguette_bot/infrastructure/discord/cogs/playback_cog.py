"""Slash-command cog for playback: play, playlist, skip, stop, pause, resume."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from baguette_bot.domain.music.entities import Track
from baguette_bot.domain.music.value_objects import PlaybackControls
from baguette_bot.domain.shared.exceptions import (
    FetchError,
    NothingPlayingError,
    PreconditionError,
    SessionAlreadyExistsError,
    VoiceConnectionError,
)
from baguette_bot.domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from baguette_bot.infrastructure.discord.control_surface import InteractionControlSurface
from baguette_bot.infrastructure.discord.guards.voice_guards import (
    get_voice_channel,
    send_ephemeral,
)
from baguette_bot.infrastructure.discord.views.playback_controls import PlaybackControlsView
from baguette_bot.utils.urls import canonicalize_locator, is_playlist_url, is_supported_url

if TYPE_CHECKING:
    from ....application.services.playback_session import PlaybackSession
    from ....config.container import Container

logger = logging.getLogger(__name__)


class PlaybackCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    def _controls_view(
        self, guild_id: int, controls: PlaybackControls | None = None
    ) -> PlaybackControlsView:
        return PlaybackControlsView(self.container.session_registry, guild_id, controls)

    def _control_surface(
        self, interaction: discord.Interaction, guild_id: int
    ) -> InteractionControlSurface:
        return InteractionControlSurface(
            interaction, lambda controls: self._controls_view(guild_id, controls)
        )

    async def _start_session(
        self,
        interaction: discord.Interaction,
        channel: discord.VoiceChannel | discord.StageChannel,
        tracks: Sequence[Track],
        starting_message: str,
    ) -> None:
        """Join voice, create the guild's session and queue ``tracks``.

        Expects the interaction to already be deferred.
        """
        assert interaction.guild is not None
        guild_id = interaction.guild.id
        registry = self.container.session_registry

        try:
            sink = await self.container.voice_connector.connect(channel)
        except VoiceConnectionError:
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE)
            return

        try:
            session = registry.create_session(guild_id, sink)
        except SessionAlreadyExistsError:
            # Another command created the session while we were connecting.
            session = registry.require_session(guild_id)
            await self._enqueue(interaction, session, tracks)
            return

        try:
            session.enqueue_batch(tracks)
        except PreconditionError as exc:
            logger.info(LogTemplates.SESSION_START_REJECTED, guild_id, exc.message)
            await session.stop()
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_OCCURRED.format(error=exc.message))
            return

        try:
            await interaction.edit_original_response(
                content=starting_message, view=self._controls_view(guild_id)
            )
        except discord.HTTPException as exc:
            logger.warning(LogTemplates.STARTING_MESSAGE_FAILED, guild_id, exc)

        # Attached after the starting message so "Now playing" replaces it.
        session.attach_control_surface(self._control_surface(interaction, guild_id))

    async def _enqueue(
        self,
        interaction: discord.Interaction,
        session: PlaybackSession,
        tracks: Sequence[Track],
        added_message: str | None = None,
    ) -> None:
        try:
            if len(tracks) == 1:
                session.enqueue(tracks[0])
            else:
                session.enqueue_batch(tracks)
        except PreconditionError as exc:
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_OCCURRED.format(error=exc.message))
            return

        message = added_message or DiscordUIMessages.ADDED_TO_QUEUE.format(url=tracks[0].locator)
        if interaction.response.is_done():
            await interaction.edit_original_response(content=message)
        else:
            await interaction.response.send_message(message)

    # ─────────────────────────────────────────────────────────────────
    # Play
    # ─────────────────────────────────────────────────────────────────

    @app_commands.command(name="play", description="Play a YouTube video's audio.")
    @app_commands.describe(url="YouTube video URL")
    async def play(self, interaction: discord.Interaction, url: str) -> None:
        channel = await get_voice_channel(interaction)
        if channel is None:
            return

        if not is_supported_url(url):
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_INVALID_URL)
            return

        assert interaction.guild is not None
        track = Track(locator=canonicalize_locator(url))
        session = self.container.session_registry.get_session(interaction.guild.id)

        if session is not None:
            await self._enqueue(interaction, session, [track])
            return

        await interaction.response.defer()
        await self._start_session(
            interaction,
            channel,
            [track],
            DiscordUIMessages.STARTING.format(url=track.locator),
        )

    @app_commands.command(name="playlist", description="Queue every video of a YouTube playlist.")
    @app_commands.describe(url="YouTube playlist URL")
    async def playlist(self, interaction: discord.Interaction, url: str) -> None:
        channel = await get_voice_channel(interaction)
        if channel is None:
            return

        if not is_playlist_url(url):
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_INVALID_PLAYLIST)
            return

        assert interaction.guild is not None
        await interaction.response.defer()

        try:
            playlist = await self.container.playlist_extractor.extract_playlist(url)
        except FetchError:
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_INVALID_PLAYLIST)
            return

        if not playlist.locators:
            await send_ephemeral(interaction, DiscordUIMessages.ERROR_EMPTY_PLAYLIST)
            return

        tracks = [Track(locator=locator) for locator in playlist.locators]
        session = self.container.session_registry.get_session(interaction.guild.id)

        if session is not None:
            await self._enqueue(
                interaction,
                session,
                tracks,
                DiscordUIMessages.ADDED_PLAYLIST.format(count=len(tracks), title=playlist.title),
            )
            return

        await self._start_session(
            interaction,
            channel,
            tracks,
            DiscordUIMessages.STARTING_PLAYLIST.format(title=playlist.title, count=len(tracks)),
        )

    # ─────────────────────────────────────────────────────────────────
    # Transport controls
    # ─────────────────────────────────────────────────────────────────

    @app_commands.command(name="skip", description="Skip the current track.")
    async def skip(self, interaction: discord.Interaction) -> None:
        if await get_voice_channel(interaction) is None:
            return

        assert interaction.guild is not None
        session = self.container.session_registry.get_session(interaction.guild.id)
        if session is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_PLAYING)
            return

        try:
            await session.skip()
        except NothingPlayingError:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_PLAYING)
            return

        await send_ephemeral(interaction, DiscordUIMessages.ACTION_SKIPPED_REPLY)

    @app_commands.command(name="stop", description="Stop playback and clear the queue.")
    async def stop(self, interaction: discord.Interaction) -> None:
        if await get_voice_channel(interaction) is None:
            return

        assert interaction.guild is not None
        session = self.container.session_registry.get_session(interaction.guild.id)
        if session is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_TO_STOP)
            return

        try:
            await session.stop()
        except PreconditionError:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_TO_STOP)
            return

        await send_ephemeral(interaction, DiscordUIMessages.ACTION_STOPPED)

    @app_commands.command(name="pause", description="Pause the current track.")
    async def pause(self, interaction: discord.Interaction) -> None:
        if await get_voice_channel(interaction) is None:
            return

        assert interaction.guild is not None
        session = self.container.session_registry.get_session(interaction.guild.id)
        if session is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_PLAYING)
            return

        try:
            await session.pause()
        except PreconditionError:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_PLAYING)
            return

        await send_ephemeral(interaction, DiscordUIMessages.ACTION_PAUSED)

    @app_commands.command(name="resume", description="Resume paused playback.")
    async def resume(self, interaction: discord.Interaction) -> None:
        if await get_voice_channel(interaction) is None:
            return

        assert interaction.guild is not None
        session = self.container.session_registry.get_session(interaction.guild.id)
        if session is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_PAUSED)
            return

        try:
            await session.resume()
        except PreconditionError:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_PAUSED)
            return

        await send_ephemeral(interaction, DiscordUIMessages.ACTION_RESUMED)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(PlaybackCog(bot, container))
