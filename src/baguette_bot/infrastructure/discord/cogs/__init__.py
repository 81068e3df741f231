"""Discord cogs - command handlers."""

from baguette_bot.infrastructure.discord.cogs.playback_cog import PlaybackCog

__all__ = [
    "PlaybackCog",
]
