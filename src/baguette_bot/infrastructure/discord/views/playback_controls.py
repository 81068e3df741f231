"""Play/Pause and Skip buttons shown under the now-playing message."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Final

import discord

from baguette_bot.domain.music.value_objects import ControlAction, PlaybackControls, PlaybackState
from baguette_bot.domain.shared.exceptions import PreconditionError
from baguette_bot.domain.shared.messages import DiscordUIMessages, EmojiConstants, LogTemplates
from baguette_bot.infrastructure.discord.guards.voice_guards import send_ephemeral
from baguette_bot.infrastructure.discord.views.base_view import BaseInteractiveView

if TYPE_CHECKING:
    from ....application.services.session_registry import SessionRegistry

logger = logging.getLogger(__name__)

_BUTTONS: Final[dict[ControlAction, tuple[str, discord.ButtonStyle]]] = {
    ControlAction.PLAY_PAUSE: (f"{EmojiConstants.PLAY_PAUSE} Play/Pause", discord.ButtonStyle.primary),
    ControlAction.SKIP: (f"{EmojiConstants.SKIP} Skip", discord.ButtonStyle.secondary),
}


class PlaybackControlsView(BaseInteractiveView):
    """Renders a ``PlaybackControls`` descriptor as buttons acting on the guild's session."""

    def __init__(
        self,
        registry: SessionRegistry,
        guild_id: int,
        controls: PlaybackControls | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        super().__init__(timeout=timeout)
        self._registry = registry
        self._guild_id = guild_id

        for action in (controls or PlaybackControls.default()).actions:
            label, style = _BUTTONS[action]
            button: discord.ui.Button[PlaybackControlsView] = discord.ui.Button(
                label=label, style=style, custom_id=f"playback:{action.value}:{guild_id}"
            )
            button.callback = self._callback_for(action)
            self.add_item(button)

    def _callback_for(
        self, action: ControlAction
    ) -> Callable[[discord.Interaction], Awaitable[None]]:
        async def callback(interaction: discord.Interaction) -> None:
            await self.handle_action(interaction, action)

        return callback

    async def handle_action(self, interaction: discord.Interaction, action: ControlAction) -> None:
        session = self._registry.get_session(self._guild_id)
        if session is None or session.is_closed:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NO_MUSIC)
            return

        try:
            if action is ControlAction.PLAY_PAUSE:
                state = await session.toggle_pause()
                content = (
                    DiscordUIMessages.ACTION_PAUSED
                    if state is PlaybackState.PAUSED
                    else DiscordUIMessages.ACTION_RESUMED
                )
                await send_ephemeral(interaction, content)
            else:
                await session.skip()
                await interaction.response.edit_message(
                    content=DiscordUIMessages.ACTION_SKIPPED, view=self
                )
        except PreconditionError as exc:
            logger.debug(LogTemplates.CONTROL_BUTTON_REJECTED, action.value, self._guild_id, exc)
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NO_MUSIC)
