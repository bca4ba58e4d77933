import asyncio

import anyio
import pytest

from StockMarket.Domain.errors import UpstreamFetchError
from StockMarket.Domain.utils.concurrency import gather_or_cancel


async def _value(value, delay=0.0):
    await anyio.sleep(delay)
    return value


def test_results_keep_argument_order():
    result = asyncio.run(gather_or_cancel(_value("slow", 0.05), _value("fast")))
    assert result == ["slow", "fast"]


def test_no_awaitables():
    assert asyncio.run(gather_or_cancel()) == []


def test_first_failure_cancels_siblings_and_is_raised_unwrapped():
    finished = []

    async def slow():
        await anyio.sleep(5)
        finished.append("slow")

    async def failing():
        raise UpstreamFetchError("Invalid API key", status_code=401)

    async def _run():
        with anyio.fail_after(2):
            await gather_or_cancel(slow(), failing())

    with pytest.raises(UpstreamFetchError, match="Invalid API key"):
        asyncio.run(_run())
    assert finished == []
