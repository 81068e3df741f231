"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code="INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state


# === Playback path (absorbed by the session, never surfaced to callers) ===


class FetchError(DomainError):
    """Raised when a stream or its metadata cannot be retrieved for a locator."""

    def __init__(self, locator: str, message: str | None = None) -> None:
        msg = message or f"Failed to fetch '{locator}'"
        super().__init__(msg, code="FETCH_ERROR")
        self.locator = locator


class SinkError(DomainError):
    """Raised when the audio sink fails to render or accept a stream."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message, code="SINK_ERROR")
        self.details = details


class ControlSurfaceError(DomainError):
    """Raised when the now-playing message cannot be posted or edited."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONTROL_SURFACE_ERROR")


class VoiceConnectionError(DomainError):
    """Raised when the bot cannot join a voice channel."""

    def __init__(self, channel_id: int, message: str | None = None) -> None:
        msg = message or f"Could not connect to voice channel {channel_id}"
        super().__init__(msg, code="VOICE_CONNECTION_ERROR")
        self.channel_id = channel_id


# === Preconditions (propagated to the command layer) ===


class PreconditionError(DomainError):
    """Raised when a caller requests an operation the session cannot accept."""

    def __init__(self, message: str, code: str = "PRECONDITION_FAILED") -> None:
        super().__init__(message, code=code)


class SessionNotFoundError(PreconditionError):
    def __init__(self, guild_id: int) -> None:
        super().__init__(f"No playback session for guild {guild_id}", code="SESSION_NOT_FOUND")
        self.guild_id = guild_id


class SessionAlreadyExistsError(PreconditionError):
    def __init__(self, guild_id: int) -> None:
        super().__init__(
            f"A playback session already exists for guild {guild_id}",
            code="SESSION_ALREADY_EXISTS",
        )
        self.guild_id = guild_id


class SessionClosedError(PreconditionError):
    """Raised for any operation on a session after it was stopped or ran dry."""

    def __init__(self, guild_id: int, operation: str) -> None:
        super().__init__(
            f"Cannot {operation}: playback session for guild {guild_id} is closed",
            code="SESSION_CLOSED",
        )
        self.guild_id = guild_id
        self.operation = operation


class NothingPlayingError(PreconditionError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: nothing is playing", code="NOTHING_PLAYING")
        self.operation = operation


class QueueFullError(PreconditionError):
    def __init__(self, max_size: int) -> None:
        super().__init__(f"Queue is full (max {max_size} tracks)", code="QUEUE_FULL")
        self.max_size = max_size
