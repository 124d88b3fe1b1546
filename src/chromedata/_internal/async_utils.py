"""Asyncio utilities."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, Coroutine, TypeVar

T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run an async coroutine from synchronous code."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop and loop.is_running():
        import concurrent.futures

        with concurrent.futures.ThreadPoolExecutor() as pool:
            return pool.submit(asyncio.run, coro).result()
    else:
        return asyncio.run(coro)


async def each_limit(
    awaitables: Iterable[Awaitable[T]],
    concurrency: int,
    on_fulfilled: Callable[[T, int], Any],
    on_rejected: Callable[[BaseException, int], Any],
) -> None:
    """Await every item of *awaitables* with at most *concurrency* in flight.

    The iterable is consumed lazily, so a generator only creates a new
    request when a slot frees up.  Callbacks receive the item's position
    in the iterable.  Cancellation is never routed to *on_rejected*.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    source = enumerate(awaitables)

    async def _worker() -> None:
        # Single-threaded event loop: next() on the shared iterator is safe.
        for idx, awaitable in source:
            try:
                result = await awaitable
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                on_rejected(exc, idx)
            else:
                on_fulfilled(result, idx)

    await asyncio.gather(*(_worker() for _ in range(concurrency)))
