"""Core domain entities for the music bounded context."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict

from baguette_bot.domain.shared.exceptions import InvalidOperationError
from baguette_bot.domain.shared.messages import ErrorMessages
from baguette_bot.domain.shared.types import NonEmptyStr, TrackTitleStr

PENDING_TITLE: Final = "pending"


class Track(BaseModel):
    """A queued request to play one remote video's audio.

    A track has no identity beyond its queue position; the same locator may be
    queued more than once.
    """

    model_config = ConfigDict(validate_assignment=True, strict=True)

    locator: NonEmptyStr
    title: TrackTitleStr = PENDING_TITLE

    @property
    def is_resolved(self) -> bool:
        return self.title != PENDING_TITLE

    @property
    def display_title(self) -> str:
        """Resolved title, or the locator while the title is still pending."""
        return self.title if self.is_resolved else self.locator

    def mark_resolved(self, title: str) -> None:
        """Set the title fetched for this track. Allowed once."""
        if self.is_resolved:
            raise InvalidOperationError(
                operation="mark_resolved",
                current_state="resolved",
                message=ErrorMessages.TRACK_ALREADY_RESOLVED.format(locator=self.locator),
            )
        self.title = (title or self.locator)[:500]
