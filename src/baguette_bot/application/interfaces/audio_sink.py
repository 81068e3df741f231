"""Port interface for the audio sink bound to one guild's voice transport."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.music.value_objects import AudioStream, SinkEvent, SinkStatus

SinkEventListener = Callable[["SinkEvent"], None]


class AudioSink(ABC):
    """Interface for the player that renders audio into a voice call.

    Implementations deliver ``SinkEvent``s to the registered listener on the
    event loop thread, never from a worker thread.
    """

    @abstractmethod
    async def play(self, stream: "AudioStream") -> int:
        """Start rendering the stream. Raises ``SinkError`` when refused.

        Returns the render id stamped on every event this render produces.
        """
        ...

    @abstractmethod
    async def pause(self) -> None:
        ...

    @abstractmethod
    async def resume(self) -> None:
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Stop the current item. The sink reports IDLE afterwards."""
        ...

    @abstractmethod
    async def subscribe_transport(self) -> None:
        """Attach the player to the voice transport. Raises ``SinkError``."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Tear down the voice transport."""
        ...

    @property
    @abstractmethod
    def status(self) -> "SinkStatus":
        """What the player is doing right now, independent of any session."""
        ...

    @abstractmethod
    def set_event_listener(self, listener: SinkEventListener | None) -> None:
        """Register the callback that receives IDLE/ERROR notifications."""
        ...
