from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_BACKOFF_SECONDS = 30.0


def compute_backoff(
    attempt: int,
    base: float = 1.5,
    jitter: float = 0.5,
    max_delay: float = MAX_BACKOFF_SECONDS,
) -> float:
    """Compute exponential backoff with jitter, capped at ``max_delay``."""
    delay = min(base ** attempt, max_delay)
    return delay + random.uniform(0, jitter)


async def schedule_retry(attempt: int) -> None:
    """Sleep for the backoff delay of ``attempt`` before an API call is retried."""
    await asyncio.sleep(compute_backoff(attempt))


async def retry_async(
    call: Callable[[], Awaitable[T]],
    max_retries: int,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    label: str = "call",
) -> T:
    """Await ``call()``, retrying ``retry_on`` failures up to ``max_retries`` times.

    The last failure is re-raised once retries are exhausted. Other
    exceptions propagate immediately.
    """
    attempt = 0
    while True:
        try:
            return await call()
        except retry_on as exc:
            if attempt >= max_retries:
                raise
            attempt += 1
            logger.warning(f"{label} failed ({exc}); retry {attempt}/{max_retries}")
            await schedule_retry(attempt)
