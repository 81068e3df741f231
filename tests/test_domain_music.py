"""
Unit Tests for the Music Domain

Tests for:
- Track entity (pending/resolved title, validation)
- PlaybackState transitions
- SinkEvent, PlaybackControls and AudioStream value objects
- Domain exceptions
"""

import pytest
from pydantic import ValidationError

from baguette_bot.domain.music import (
    PENDING_TITLE,
    AudioStream,
    ControlAction,
    PlaybackControls,
    PlaybackState,
    SinkEvent,
    SinkEventKind,
    Track,
)
from baguette_bot.domain.shared.exceptions import (
    FetchError,
    InvalidOperationError,
    NothingPlayingError,
    PreconditionError,
    QueueFullError,
    SessionClosedError,
)

# =============================================================================
# Track Entity Tests
# =============================================================================


class TestTrack:
    def test_new_track_is_pending(self):
        """Should start with the placeholder title."""
        track = Track(locator="https://youtube.com/watch?v=dQw4w9WgXcQ")

        assert track.title == PENDING_TITLE
        assert not track.is_resolved

    def test_display_title_falls_back_to_locator(self):
        track = Track(locator="https://youtube.com/watch?v=dQw4w9WgXcQ")

        assert track.display_title == "https://youtube.com/watch?v=dQw4w9WgXcQ"

    def test_mark_resolved_sets_title(self):
        track = Track(locator="A")

        track.mark_resolved("Never Gonna Give You Up")

        assert track.is_resolved
        assert track.title == "Never Gonna Give You Up"
        assert track.display_title == "Never Gonna Give You Up"

    def test_mark_resolved_twice_raises(self):
        """Should only allow the pending title to be replaced once."""
        track = Track(locator="A")
        track.mark_resolved("First")

        with pytest.raises(InvalidOperationError):
            track.mark_resolved("Second")

        assert track.title == "First"

    def test_mark_resolved_empty_title_uses_locator(self):
        track = Track(locator="A")

        track.mark_resolved("")

        assert track.title == "A"

    def test_mark_resolved_truncates_long_title(self):
        track = Track(locator="A")

        track.mark_resolved("x" * 600)

        assert len(track.title) == 500

    def test_empty_locator_rejected(self):
        with pytest.raises(ValidationError):
            Track(locator="")

    def test_non_string_locator_rejected(self):
        with pytest.raises(ValidationError):
            Track(locator=123)

    def test_same_locator_twice_are_distinct_tracks(self):
        """Should not deduplicate tracks by locator."""
        first = Track(locator="A")
        second = Track(locator="A")

        first.mark_resolved("Resolved")

        assert first is not second
        assert not second.is_resolved


# =============================================================================
# PlaybackState Tests
# =============================================================================


class TestPlaybackState:
    @pytest.mark.parametrize(
        "source,target",
        [
            (PlaybackState.IDLE, PlaybackState.FETCHING),
            (PlaybackState.FETCHING, PlaybackState.FETCHING),
            (PlaybackState.FETCHING, PlaybackState.PLAYING),
            (PlaybackState.FETCHING, PlaybackState.IDLE),
            (PlaybackState.PLAYING, PlaybackState.PAUSED),
            (PlaybackState.PAUSED, PlaybackState.PLAYING),
            (PlaybackState.PLAYING, PlaybackState.IDLE),
            (PlaybackState.PAUSED, PlaybackState.IDLE),
        ],
    )
    def test_valid_transitions(self, source, target):
        assert source.can_transition_to(target)

    @pytest.mark.parametrize(
        "source,target",
        [
            (PlaybackState.IDLE, PlaybackState.PLAYING),
            (PlaybackState.IDLE, PlaybackState.PAUSED),
            (PlaybackState.PLAYING, PlaybackState.FETCHING),
            (PlaybackState.PAUSED, PlaybackState.FETCHING),
            (PlaybackState.FETCHING, PlaybackState.PAUSED),
        ],
    )
    def test_invalid_transitions(self, source, target):
        assert not source.can_transition_to(target)

    def test_is_active(self):
        assert PlaybackState.PLAYING.is_active
        assert PlaybackState.PAUSED.is_active
        assert not PlaybackState.IDLE.is_active
        assert not PlaybackState.FETCHING.is_active

    def test_is_playing(self):
        assert PlaybackState.PLAYING.is_playing
        assert not PlaybackState.PAUSED.is_playing


# =============================================================================
# Value Object Tests
# =============================================================================


class TestSinkEvent:
    def test_idle_event(self):
        event = SinkEvent.idle()

        assert event.kind is SinkEventKind.IDLE
        assert not event.is_error
        assert event.details is None

    def test_error_event(self):
        event = SinkEvent.error("ffmpeg crashed")

        assert event.is_error
        assert event.details == "ffmpeg crashed"

    def test_events_compare_by_value(self):
        assert SinkEvent.idle() == SinkEvent.idle()

    def test_render_id_distinguishes_events(self):
        assert SinkEvent.idle(render_id=3).render_id == 3
        assert SinkEvent.error("boom", render_id=3) != SinkEvent.error("boom", render_id=4)


class TestPlaybackControls:
    def test_default_offers_play_pause_and_skip(self):
        controls = PlaybackControls.default()

        assert controls.actions == (ControlAction.PLAY_PAUSE, ControlAction.SKIP)


class TestAudioStream:
    def test_create(self):
        stream = AudioStream(url="https://cdn.example/audio", http_headers={"Cookie": "a=b"})

        assert stream.url == "https://cdn.example/audio"
        assert stream.http_headers == {"Cookie": "a=b"}

    def test_headers_default_empty(self):
        assert AudioStream(url="https://cdn.example/audio").http_headers == {}

    @pytest.mark.parametrize("url", ["", "   "])
    def test_blank_url_rejected(self, url):
        with pytest.raises(ValueError):
            AudioStream(url=url)

    def test_equality_ignores_headers(self):
        a = AudioStream(url="https://cdn.example/audio", http_headers={"X": "1"})
        b = AudioStream(url="https://cdn.example/audio")

        assert a == b
        assert hash(a) == hash(b)


# =============================================================================
# Exception Tests
# =============================================================================


class TestExceptions:
    def test_precondition_errors_share_base(self):
        for error in (
            SessionClosedError(1, "enqueue"),
            NothingPlayingError("skip"),
            QueueFullError(10),
        ):
            assert isinstance(error, PreconditionError)

    def test_fetch_error_is_not_precondition(self):
        assert not isinstance(FetchError("A"), PreconditionError)

    def test_fetch_error_default_message(self):
        error = FetchError("A")

        assert error.message == "Failed to fetch 'A'"
        assert error.code == "FETCH_ERROR"

    def test_session_closed_message(self):
        error = SessionClosedError(42, "skip")

        assert "42" in error.message
        assert error.code == "SESSION_CLOSED"
