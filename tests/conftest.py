"""Shared fakes for the StockMarket test suite."""

from typing import Any

import pytest

from StockMarket.Domain.endpoints import UpstreamRequest
from StockMarket.Domain.errors import UpstreamFetchError
from StockMarket.Domain.generation_request import GenerationRequest
from StockMarket.Ports.Outbound.financial_api_interface import FinancialDataAPI
from StockMarket.Ports.Outbound.sampling_interface import SamplingTransport


class FakeFinancialAPI(FinancialDataAPI):
    """
    Answers from a table keyed by (path, ticker). A value that is an
    exception instance is raised instead of returned.
    """

    def __init__(self, table: dict[tuple[str, str | None], Any]):
        self.table = table
        self.requests: list[UpstreamRequest] = []
        self.closed = False

    async def fetch(self, request: UpstreamRequest) -> Any:
        self.requests.append(request)
        key = (request.path, dict(request.params).get("ticker"))
        if key not in self.table:
            raise UpstreamFetchError("Resource not found", endpoint=request.path, status_code=404)
        value = self.table[key]
        if isinstance(value, Exception):
            raise value
        return value

    async def close(self) -> None:
        self.closed = True


class StubTransport(SamplingTransport):
    def __init__(self, reply: Any = None, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.sent: list[GenerationRequest] = []

    async def send_generation_request(self, request: GenerationRequest) -> Any:
        self.sent.append(request)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def apple_api() -> FakeFinancialAPI:
    return FakeFinancialAPI(
        {
            ("/company/facts", "AAPL"): {"name": "Apple Inc."},
            ("/financial-metrics/snapshot", "AAPL"): {"pe": 25.2},
            ("/prices/snapshot", "AAPL"): {"close": 195.0},
        }
    )


@pytest.fixture
def fake_api_cls():
    return FakeFinancialAPI


@pytest.fixture
def stub_transport_cls():
    return StubTransport
