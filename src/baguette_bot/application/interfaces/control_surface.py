"""Port interface for the user-visible now-playing message."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.music.value_objects import PlaybackControls

MessageHandle = Any


class ControlSurface(ABC):
    """Interface for posting and updating one session's status message."""

    @abstractmethod
    async def post_or_update(self, text: str, controls: "PlaybackControls") -> MessageHandle:
        """Post the message the first time, edit the same message afterwards.

        Raises ``ControlSurfaceError`` when the message cannot be delivered.
        """
        ...
