"""Racing awaitables against each other and against a deadline."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], timeout_ms: float) -> T | None:
    """Return the result of ``awaitable``, or None if it takes longer than ``timeout_ms``."""
    try:
        async with asyncio.timeout(timeout_ms / 1000):
            return await awaitable
    except TimeoutError:
        return None


async def race(first: Awaitable[T], second: Awaitable[T]) -> T:
    """Return the result of whichever awaitable finishes first; cancel the other.

    If both finish together, ``first`` wins. An exception from the winner
    propagates.
    """
    tasks = [asyncio.ensure_future(first), asyncio.ensure_future(second)]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
    winner = next(task for task in tasks if task in done)
    return winner.result()