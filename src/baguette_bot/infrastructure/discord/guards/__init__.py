"""Interaction guards shared by cogs and views."""

from baguette_bot.infrastructure.discord.guards.voice_guards import (
    get_member,
    get_voice_channel,
    send_ephemeral,
)

__all__ = [
    "get_member",
    "get_voice_channel",
    "send_ephemeral",
]
