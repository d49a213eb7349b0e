"""Fan-out/join helper for running independent coroutines as one phase."""

import asyncio
from collections.abc import Awaitable, Mapping
from typing import TypeVar

T = TypeVar("T")


async def gather_tagged(work: Mapping[str, Awaitable[T]]) -> dict[str, T]:
    """Run tagged awaitables concurrently and wait for all of them.

    Results are keyed by the tag they were submitted under, in the order of
    ``work``, so completion order never affects the outcome.

    If any item raises, every sibling still running is cancelled and awaited
    before the first exception is re-raised unchanged.

    Args:
        work: Mapping of tag to awaitable

    Returns:
        Mapping of tag to result
    """
    tasks = {tag: asyncio.ensure_future(aw) for tag, aw in work.items()}

    try:
        await asyncio.gather(*tasks.values())
    except BaseException:
        for task in tasks.values():
            task.cancel()
        await asyncio.gather(*tasks.values(), return_exceptions=True)
        raise

    return {tag: task.result() for tag, task in tasks.items()}
