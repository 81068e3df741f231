"""Discord UI views and components."""

from __future__ import annotations

from baguette_bot.infrastructure.discord.views.base_view import BaseInteractiveView
from baguette_bot.infrastructure.discord.views.playback_controls import PlaybackControlsView

__all__ = [
    "BaseInteractiveView",
    "PlaybackControlsView",
]
