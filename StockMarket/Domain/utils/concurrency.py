from __future__ import annotations

from typing import Any, Awaitable

import anyio


async def gather_or_cancel(*awaitables: Awaitable[Any]) -> list[Any]:
    """
    Run the awaitables concurrently and return their results in order.

    The first failure cancels the siblings that are still running and is
    re-raised as is, so callers can catch their own exception types.
    """
    results: list[Any] = [None] * len(awaitables)
    errors: list[Exception] = []

    async with anyio.create_task_group() as tg:

        async def _run(index: int, awaitable: Awaitable[Any]) -> None:
            try:
                results[index] = await awaitable
            except Exception as e:
                errors.append(e)
                tg.cancel_scope.cancel()

        for index, awaitable in enumerate(awaitables):
            tg.start_soon(_run, index, awaitable)

    if errors:
        raise errors[0]
    return results
