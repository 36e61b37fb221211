"""Bounded concurrent fan-out for batches of independent Discord calls."""

import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")

# Upper bound on simultaneous requests in one batch
MAX_CONCURRENT_REQUESTS = 10


async def run_bounded(
    calls: Iterable[Callable[[], Awaitable[T]]],
    limit: int = MAX_CONCURRENT_REQUESTS,
) -> list[T]:
    """
    Run calls concurrently, at most limit at a time.

    Results are returned in submission order. Calls are expected to handle
    their own errors; an exception escaping one propagates to the caller.
    """
    semaphore = asyncio.Semaphore(limit)

    async def run_with_semaphore(call: Callable[[], Awaitable[T]]) -> T:
        async with semaphore:
            return await call()

    return await asyncio.gather(*[run_with_semaphore(call) for call in calls])
