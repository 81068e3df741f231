"""Immutable value objects for the music bounded context."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from baguette_bot.domain.shared.messages import ErrorMessages


class PlaybackState(Enum):
    """Playback state of a guild session with enforced transitions.

    State transitions:
    - IDLE -> FETCHING (front track is being fetched)
    - FETCHING -> FETCHING (previous front discarded, next one fetched)
    - FETCHING -> PLAYING (stream handed to the sink)
    - FETCHING -> IDLE (front track discarded)
    - PLAYING -> PAUSED (pause)
    - PAUSED -> PLAYING (resume)
    - PLAYING/PAUSED -> IDLE (sink went idle or errored)
    """

    IDLE = "idle"
    FETCHING = "fetching"
    PLAYING = "playing"
    PAUSED = "paused"

    def can_transition_to(self, target: PlaybackState) -> bool:
        """Check if transition to target state is valid."""
        valid_transitions = {
            PlaybackState.IDLE: {PlaybackState.FETCHING},
            PlaybackState.FETCHING: {
                PlaybackState.FETCHING,
                PlaybackState.PLAYING,
                PlaybackState.IDLE,
            },
            PlaybackState.PLAYING: {PlaybackState.PAUSED, PlaybackState.IDLE},
            PlaybackState.PAUSED: {PlaybackState.PLAYING, PlaybackState.IDLE},
        }
        return target in valid_transitions.get(self, set())

    @property
    def is_active(self) -> bool:
        return self in {PlaybackState.PLAYING, PlaybackState.PAUSED}

    @property
    def is_playing(self) -> bool:
        return self == PlaybackState.PLAYING


class SinkStatus(Enum):
    """What the audio sink reports about itself."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


class SinkEventKind(Enum):
    IDLE = "idle"
    ERROR = "error"


@dataclass(frozen=True)
class SinkEvent:
    """Notification from the sink that the current item ended.

    ``render_id`` identifies the ``play`` call the event belongs to, so a
    late notification from an abandoned render can be told apart from the
    end of the current one.
    """

    kind: SinkEventKind
    details: str | None = None
    render_id: int | None = None

    @classmethod
    def idle(cls, render_id: int | None = None) -> SinkEvent:
        return cls(SinkEventKind.IDLE, render_id=render_id)

    @classmethod
    def error(cls, details: str, render_id: int | None = None) -> SinkEvent:
        return cls(SinkEventKind.ERROR, details, render_id)

    @property
    def is_error(self) -> bool:
        return self.kind is SinkEventKind.ERROR


class ControlAction(Enum):
    """Buttons offered next to the now-playing message."""

    PLAY_PAUSE = "play_pause"
    SKIP = "skip"


@dataclass(frozen=True)
class PlaybackControls:
    """Descriptor of the controls shown with a now-playing message.

    The playback core builds it and hands it to the control surface without
    interpreting it.
    """

    actions: tuple[ControlAction, ...] = (ControlAction.PLAY_PAUSE, ControlAction.SKIP)

    @classmethod
    def default(cls) -> PlaybackControls:
        return cls()


@dataclass(frozen=True)
class AudioStream:
    """A readable media stream: a direct URL plus the headers needed to read it."""

    url: str
    http_headers: dict[str, str] = field(default_factory=dict, hash=False, compare=False)

    def __post_init__(self) -> None:
        if not self.url or not self.url.strip():
            raise ValueError(ErrorMessages.EMPTY_STREAM_URL)
