"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the playback core
and infrastructure adapters. These are the "ports" in hexagonal
architecture.
"""

from baguette_bot.application.interfaces.audio_sink import AudioSink, SinkEventListener
from baguette_bot.application.interfaces.control_surface import ControlSurface, MessageHandle
from baguette_bot.application.interfaces.stream_provider import (
    PlaylistExtractor,
    PlaylistInfo,
    StreamProvider,
)

__all__ = [
    "AudioSink",
    "SinkEventListener",
    "ControlSurface",
    "MessageHandle",
    "StreamProvider",
    "PlaylistExtractor",
    "PlaylistInfo",
]
