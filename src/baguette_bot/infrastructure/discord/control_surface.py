"""ControlSurface that keeps one now-playing message per session up to date."""

from __future__ import annotations

import logging
from collections.abc import Callable

import discord

from baguette_bot.application.interfaces.control_surface import ControlSurface
from baguette_bot.domain.music.value_objects import PlaybackControls
from baguette_bot.domain.shared.exceptions import ControlSurfaceError
from baguette_bot.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

ViewFactory = Callable[[PlaybackControls], discord.ui.View]


class InteractionControlSurface(ControlSurface):
    """Replies to the originating interaction once, then edits that reply.

    Interaction tokens expire after fifteen minutes, so when editing fails the
    surface posts a fresh message in the interaction's channel and keeps
    editing that one instead.
    """

    def __init__(self, interaction: discord.Interaction, view_factory: ViewFactory) -> None:
        self._interaction = interaction
        self._view_factory = view_factory
        self._message: discord.Message | None = None

    @property
    def message(self) -> discord.Message | None:
        return self._message

    async def post_or_update(self, text: str, controls: PlaybackControls) -> discord.Message:
        view = self._view_factory(controls)
        try:
            self._message = await self._post_or_edit(text, view)
        except discord.HTTPException as exc:
            logger.debug(LogTemplates.CONTROL_SURFACE_HTTP_ERROR, exc)
            self._message = await self._post_to_channel(text, view, exc)

        set_message = getattr(view, "set_message", None)
        if callable(set_message):
            set_message(self._message)
        return self._message

    async def _post_or_edit(self, text: str, view: discord.ui.View) -> discord.Message:
        if self._message is not None:
            return await self._message.edit(content=text, view=view)
        if self._interaction.response.is_done():
            return await self._interaction.edit_original_response(content=text, view=view)
        await self._interaction.response.send_message(text, view=view)
        return await self._interaction.original_response()

    async def _post_to_channel(
        self, text: str, view: discord.ui.View, cause: discord.HTTPException
    ) -> discord.Message:
        channel = self._interaction.channel
        if channel is None or not isinstance(channel, discord.abc.Messageable):
            raise ControlSurfaceError(ErrorMessages.CONTROL_SURFACE_FAILED) from cause
        try:
            return await channel.send(text, view=view)
        except discord.HTTPException as exc:
            raise ControlSurfaceError(ErrorMessages.CONTROL_SURFACE_FAILED) from exc
