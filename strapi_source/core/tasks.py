"""Concurrent execution with fail-fast cancellation."""

import asyncio
from typing import Any, Awaitable

import structlog

logger = structlog.get_logger(__name__)


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Run awaitables concurrently and return their results in order.

    When one of them raises, every sibling still running is cancelled and
    awaited before the error propagates, so no work continues after the
    caller has seen the failure.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.debug("sibling_tasks_cancelled", count=len(pending))
            await asyncio.gather(*pending, return_exceptions=True)
        raise
