"""Retry with exponential backoff for idempotent store reads.

Writes are never passed through here: a write that timed out may still have
landed, and replaying it would double-apply.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Tuple, Type, TypeVar

from pydantic import BaseModel, Field

from src.domain.errors import StoreUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryConfig(BaseModel):
    """Tuneable parameters for retry behaviour"""

    attempts: int = Field(default=3, ge=1, description="Total attempts, including the first")
    base_delay: float = Field(default=0.05, ge=0.0, description="Delay before the first retry")
    max_delay: float = Field(default=2.0, gt=0.0, description="Upper bound on any single delay")


def compute_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Backoff before retry number ``attempt`` (1-based): base, 2x base, 4x base..."""
    return min(base_delay * (2 ** (attempt - 1)), max_delay)


async def async_retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    config: RetryConfig,
    retryable_exceptions: Tuple[Type[Exception], ...] = (StoreUnavailable,),
) -> T:
    """
    Await ``fn()`` until it succeeds or the attempts run out.

    Only ``retryable_exceptions`` trigger a retry; anything else propagates
    immediately. The last retryable exception is re-raised when exhausted.
    """
    attempt = 1
    while True:
        try:
            return await fn()
        except retryable_exceptions as exc:
            if attempt >= config.attempts:
                raise
            delay = compute_delay(attempt, config.base_delay, config.max_delay)
            logger.warning(f"Retry {attempt}/{config.attempts - 1} after {delay:.2f}s: {exc}")
            await asyncio.sleep(delay)
            attempt += 1


async def read_with_retry(fn: Callable[[], Awaitable[T]], attempts: int = 3) -> T:
    """Shorthand used by read use cases"""
    return await async_retry_with_backoff(fn, RetryConfig(attempts=attempts))
