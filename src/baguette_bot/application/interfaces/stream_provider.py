"""Port interfaces for fetching audio streams, metadata and playlists."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from baguette_bot.domain.shared.types import HttpUrlStr, NonEmptyStr

if TYPE_CHECKING:
    from ...domain.music.value_objects import AudioStream


class StreamProvider(ABC):
    """Interface for turning a track locator into something the sink can play.

    Both operations raise ``FetchError`` on any failure.
    """

    @abstractmethod
    async def fetch_stream(self, locator: NonEmptyStr) -> "AudioStream":
        """Open a readable audio stream for the locator."""
        ...

    @abstractmethod
    async def fetch_metadata(self, locator: NonEmptyStr) -> str:
        """Fetch the human-readable title for the locator."""
        ...


@dataclass(frozen=True)
class PlaylistInfo:
    title: str
    locators: tuple[str, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.locators)


class PlaylistExtractor(ABC):
    """Interface for expanding a playlist URL into track locators."""

    @abstractmethod
    async def extract_playlist(self, url: HttpUrlStr) -> PlaylistInfo:
        """Return the playlist title and its entries' locators. Raises ``FetchError``."""
        ...
