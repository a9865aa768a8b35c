"""Fan-out/fan-in joins over coroutines.

Two policies are used by the caches:

* ``join_all``: fail fast. The first failure cancels the remaining branches and is re-raised.
* ``join_settled``: every failure is logged and becomes None; siblings keep running.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def join_all(*aws: Awaitable[T]) -> list[T]:
    """Run awaitables concurrently and return their results in order.

    Raises:
        Exception: The first branch failure; unfinished branches are cancelled.

    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


async def settle(aw: Awaitable[T]) -> T | None:
    """Await one branch, mapping any failure to None."""
    try:
        return await aw
    except Exception:
        logger.warning("Branch failed, treating result as absent", exc_info=True)
        return None


async def join_settled(*aws: Awaitable[T]) -> list[T | None]:
    """Run awaitables concurrently; a failed branch yields None instead of aborting the join."""
    return await join_all(*(settle(aw) for aw in aws))
