"""Tests for the interaction guard helpers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import discord

from baguette_bot.domain.shared.messages import DiscordUIMessages
from baguette_bot.infrastructure.discord.guards import get_member, get_voice_channel, send_ephemeral


def _make_interaction(
    *,
    in_guild: bool = True,
    user_is_member: bool = True,
    in_voice: bool = True,
    responded: bool = False,
) -> MagicMock:
    interaction = MagicMock(spec=discord.Interaction)
    interaction.guild = MagicMock(id=1) if in_guild else None
    interaction.response = MagicMock()
    interaction.response.is_done.return_value = responded
    interaction.response.send_message = AsyncMock()
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()

    if user_is_member:
        user = MagicMock(spec=discord.Member)
        if in_voice:
            user.voice = MagicMock()
            user.voice.channel = MagicMock(id=100)
        else:
            user.voice = None
    else:
        user = MagicMock(spec=discord.User)
    interaction.user = user
    return interaction


# =============================================================================
# send_ephemeral
# =============================================================================


class TestSendEphemeral:
    async def test_fresh_interaction_uses_response(self):
        interaction = _make_interaction()

        await send_ephemeral(interaction, "hello")

        interaction.response.send_message.assert_awaited_once_with("hello", ephemeral=True)
        interaction.followup.send.assert_not_awaited()

    async def test_responded_interaction_uses_followup(self):
        interaction = _make_interaction(responded=True)

        await send_ephemeral(interaction, "hello")

        interaction.followup.send.assert_awaited_once_with("hello", ephemeral=True)
        interaction.response.send_message.assert_not_awaited()


# =============================================================================
# get_member / get_voice_channel
# =============================================================================


class TestGetMember:
    async def test_returns_member(self):
        interaction = _make_interaction()

        assert await get_member(interaction) is interaction.user

    async def test_outside_guild(self):
        interaction = _make_interaction(in_guild=False)

        assert await get_member(interaction) is None
        interaction.response.send_message.assert_awaited_once_with(
            DiscordUIMessages.STATE_SERVER_ONLY, ephemeral=True
        )

    async def test_plain_user(self):
        interaction = _make_interaction(user_is_member=False)

        assert await get_member(interaction) is None


class TestGetVoiceChannel:
    async def test_returns_callers_channel(self):
        interaction = _make_interaction()

        channel = await get_voice_channel(interaction)

        assert channel is interaction.user.voice.channel
        interaction.response.send_message.assert_not_awaited()

    async def test_not_in_voice(self):
        interaction = _make_interaction(in_voice=False)

        assert await get_voice_channel(interaction) is None
        interaction.response.send_message.assert_awaited_once_with(
            DiscordUIMessages.STATE_MUST_BE_IN_VOICE, ephemeral=True
        )
