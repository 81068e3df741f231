# ruff: noqa: N999
"""
Domain Layer

Contains pure playback logic organized by bounded contexts:
- shared/: Cross-cutting types, messages and exceptions
- music/: Track entity and playback state value objects
"""

from baguette_bot.domain.shared.exceptions import DomainError, PreconditionError

__all__ = [
    "DomainError",
    "PreconditionError",
]
