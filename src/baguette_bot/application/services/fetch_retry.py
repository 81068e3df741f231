"""Fixed-delay retry policy for stream fetches."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ...domain.shared.exceptions import FetchError
from ...domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def fetch_with_retry(
    operation: Callable[[str], Awaitable[T]],
    locator: str,
    *,
    attempts: int,
    delay_seconds: float,
) -> T:
    """Call ``operation(locator)`` up to ``attempts`` times.

    Every failure is logged with its attempt number and wrapped in
    ``FetchError``; the last one is raised once attempts run out. Waits
    ``delay_seconds`` between attempts but not after the final one.
    Cancellation is never retried.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    last_error: FetchError | None = None
    for attempt in range(1, attempts + 1):
        try:
            return await operation(locator)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            if isinstance(exc, FetchError):
                last_error = exc
            else:
                last_error = FetchError(locator, str(exc) or type(exc).__name__)
                last_error.__cause__ = exc
            logger.warning(LogTemplates.FETCH_ATTEMPT_FAILED, attempt, attempts, locator, exc)

        if attempt < attempts:
            await asyncio.sleep(delay_seconds)

    logger.error(LogTemplates.FETCH_EXHAUSTED, locator, attempts)
    assert last_error is not None
    raise last_error
