"""
Shared Domain Kernel

Contains types, messages and exceptions shared across the package.
"""

from baguette_bot.domain.shared.exceptions import (
    ControlSurfaceError,
    DomainError,
    FetchError,
    InvalidOperationError,
    NothingPlayingError,
    PreconditionError,
    QueueFullError,
    SessionAlreadyExistsError,
    SessionClosedError,
    SessionNotFoundError,
    SinkError,
    VoiceConnectionError,
)

__all__ = [
    "DomainError",
    "InvalidOperationError",
    "FetchError",
    "SinkError",
    "ControlSurfaceError",
    "VoiceConnectionError",
    "PreconditionError",
    "SessionNotFoundError",
    "SessionAlreadyExistsError",
    "SessionClosedError",
    "NothingPlayingError",
    "QueueFullError",
]
