"""
Music Bounded Context

Domain types for tracks and the playback state machine.
"""

from baguette_bot.domain.music.entities import PENDING_TITLE, Track
from baguette_bot.domain.music.value_objects import (
    AudioStream,
    ControlAction,
    PlaybackControls,
    PlaybackState,
    SinkEvent,
    SinkEventKind,
    SinkStatus,
)

__all__ = [
    # Entities
    "Track",
    "PENDING_TITLE",
    # Value Objects
    "PlaybackState",
    "SinkStatus",
    "SinkEvent",
    "SinkEventKind",
    "ControlAction",
    "PlaybackControls",
    "AudioStream",
]
