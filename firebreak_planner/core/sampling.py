"""Bounded-concurrency provider lookups that keep along-track order.

Segmentation is a strictly sequential pass over an ordered list, so lookups
may run concurrently but their results are always returned index-aligned
with the input. The first failing lookup propagates to the caller.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from firebreak_planner.constants import ConcurrencyConfig
from firebreak_planner.core.errors import InvalidInputError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def fetch_in_order(
    items: Sequence[T],
    fetch: Callable[[T], Awaitable[R]],
    max_concurrency: int = ConcurrencyConfig.MAX_CONCURRENT_REQUESTS,
) -> list[R]:
    """Await `fetch(item)` for every item with at most `max_concurrency` in flight.

    Args:
        items: Ordered inputs (e.g. resampled coordinates)
        fetch: Async lookup for one item
        max_concurrency: Size of the concurrent-request window

    Returns:
        Results in the same order as `items`.

    Raises:
        InvalidInputError: If max_concurrency is below 1.
        Exception: Whatever the first failing fetch raised.
    """
    if max_concurrency < 1:
        raise InvalidInputError(f"max_concurrency must be at least 1, got {max_concurrency}")

    semaphore = asyncio.Semaphore(max_concurrency)

    async def limited_fetch(item: T) -> R:
        async with semaphore:
            return await fetch(item)

    # gather preserves argument order regardless of completion order
    results = await asyncio.gather(*(limited_fetch(item) for item in items))
    logger.debug(f"Fetched {len(results)} samples with window {max_concurrency}")
    return list(results)
