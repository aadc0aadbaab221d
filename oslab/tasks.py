"""Running many small coroutines concurrently as asyncio tasks."""

import asyncio


async def concurrent_squares(n: int) -> list[int]:
    """Square each number in ``range(n)`` in its own task; results in order."""

    async def square(i: int) -> int:
        return i * i

    async with asyncio.TaskGroup() as group:
        tasks = [group.create_task(square(i)) for i in range(n)]
    return [task.result() for task in tasks]


async def parallel_sleep_tasks(n: int, duration_ms: int) -> list[int]:
    """Start ``n`` tasks that each sleep ``duration_ms`` and return their id.

    The tasks sleep concurrently, so the whole call takes about one sleep.
    """

    async def sleeper(task_id: int) -> int:
        await asyncio.sleep(duration_ms / 1000)
        return task_id

    async with asyncio.TaskGroup() as group:
        tasks = [group.create_task(sleeper(i)) for i in range(n)]
    return [task.result() for task in tasks]