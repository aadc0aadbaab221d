"""Producer and consumer tasks connected by a bounded asyncio queue."""

import asyncio

_CLOSED = object()


async def _collect(queue: asyncio.Queue) -> list[str]:
    results = []
    while (item := await queue.get()) is not _CLOSED:
        results.append(item)
    return results


async def producer_consumer(items: list[str]) -> list[str]:
    """Send ``items`` from a producer task to a consumer task; return what arrived in order."""
    queue: asyncio.Queue = asyncio.Queue(maxsize=max(len(items), 1))

    async def produce() -> None:
        for item in items:
            await queue.put(item)
        await queue.put(_CLOSED)

    async with asyncio.TaskGroup() as group:
        group.create_task(produce())
        consumer = group.create_task(_collect(queue))
    return consumer.result()


async def fan_in(n_producers: int) -> list[str]:
    """Collect one message from each of ``n_producers`` tasks, sorted.

    Raises ValueError if ``n_producers`` is less than one, since the queue
    needs a positive capacity.
    """
    if n_producers < 1:
        raise ValueError("fan_in needs at least one producer")
    queue: asyncio.Queue = asyncio.Queue(maxsize=n_producers)

    async with asyncio.TaskGroup() as group:
        consumer = group.create_task(_collect(queue))
        async with asyncio.TaskGroup() as producers:
            for producer_id in range(n_producers):
                producers.create_task(queue.put(f"producer {producer_id}: message"))
        await queue.put(_CLOSED)
    return sorted(consumer.result())