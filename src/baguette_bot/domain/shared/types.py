"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the package is defined here once,
so models can simply annotate their fields::

    from baguette_bot.domain.shared.types import NonEmptyStr, VolumeFloat

    class MyModel(BaseModel):
        locator: NonEmptyStr
        volume: VolumeFloat
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
"""Float >= 0.0."""

VolumeFloat = Annotated[float, Field(ge=0.0, le=2.0)]
"""Audio volume multiplier in [0.0, 2.0]."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

TrackTitleStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Track title: 1-500 characters."""

HttpUrlStr = Annotated[str, Field(pattern=r"^https?://")]
"""String that starts with http:// or https://."""


# ── Settings-specific constraints ──────────────────────────────────

FetchAttempts = Annotated[int, Field(ge=1, le=10)]
"""Stream fetch attempts per track: 1 … 10."""

RetryDelaySeconds = Annotated[float, Field(ge=0.0, le=30.0)]
"""Fixed delay between fetch attempts: 0 … 30 seconds."""

MaxQueueSize = Annotated[int, Field(gt=0, le=10_000)]
"""Maximum queue size: 1 … 10 000."""
