"""Joins voice channels and hands back an AudioSink for the connection."""

from __future__ import annotations

import asyncio
import logging

import discord

from baguette_bot.config.settings import AudioSettings
from baguette_bot.domain.shared.exceptions import VoiceConnectionError
from baguette_bot.domain.shared.messages import LogTemplates
from baguette_bot.infrastructure.discord.audio_sink import DiscordAudioSink

logger = logging.getLogger(__name__)

VoiceChannel = discord.VoiceChannel | discord.StageChannel


class DiscordVoiceConnector:
    def __init__(self, settings: AudioSettings | None = None) -> None:
        self._settings = settings or AudioSettings()

    async def connect(self, channel: VoiceChannel) -> DiscordAudioSink:
        """Join ``channel`` self-deafened, reusing a live connection in the guild."""
        guild = channel.guild
        existing = guild.voice_client

        if isinstance(existing, discord.VoiceClient):
            if existing.is_connected():
                if existing.channel is None or existing.channel.id != channel.id:
                    await self._move(existing, channel)
                logger.info(LogTemplates.VOICE_REUSED, guild.id)
                return DiscordAudioSink(existing, self._settings)
            await existing.disconnect(force=True)

        try:
            async with asyncio.timeout(self._settings.connect_timeout_seconds):
                voice_client = await channel.connect(self_deaf=True)
        except TimeoutError as e:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel.id)
            raise VoiceConnectionError(channel.id) from e
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            raise VoiceConnectionError(channel.id, str(e)) from e
        except discord.Forbidden as e:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel.id)
            raise VoiceConnectionError(channel.id) from e

        logger.info(LogTemplates.VOICE_CONNECTED, channel.name, guild.name)
        return DiscordAudioSink(voice_client, self._settings)

    async def _move(self, voice_client: discord.VoiceClient, channel: VoiceChannel) -> None:
        try:
            async with asyncio.timeout(self._settings.connect_timeout_seconds):
                await voice_client.move_to(channel)
        except TimeoutError as e:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel.id)
            raise VoiceConnectionError(channel.id) from e
