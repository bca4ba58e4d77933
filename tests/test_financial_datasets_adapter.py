import asyncio
import json

import httpx
import pytest

from StockMarket.Adapters.Outbound.financial_datasets_adapter import FinancialDatasetsClient
from StockMarket.Domain import endpoints
from StockMarket.Domain.errors import ConfigurationError, UpstreamFetchError


def _client(handler) -> FinancialDatasetsClient:
    return FinancialDatasetsClient(
        api_key="test-key",
        base_url="https://api.example.test/",
        transport=httpx.MockTransport(handler),
    )


def _fetch(client: FinancialDatasetsClient, request):
    async def _run():
        try:
            return await client.fetch(request)
        finally:
            await client.close()

    return asyncio.run(_run())


def test_get_sends_key_and_unwraps_response_field():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("X-API-KEY")
        return httpx.Response(200, json={"company_facts": {"name": "Apple Inc."}})

    result = _fetch(_client(handler), endpoints.company_facts("AAPL"))

    assert result == {"name": "Apple Inc."}
    assert seen["url"] == "https://api.example.test/company/facts?ticker=AAPL"
    assert seen["key"] == "test-key"


def test_repeated_query_keys_are_preserved():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["items"] = request.url.params.get_list("item")
        return httpx.Response(200, json={"items": []})

    result = _fetch(_client(handler), endpoints.sec_filing_items("AAPL", "10-K", 2023, items=["Item-1", "Item-7"]))

    assert seen["items"] == ["Item-1", "Item-7"]
    assert result == {"items": []}


def test_post_sends_json_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"search_results": [{"ticker": "AAPL"}]})

    request = endpoints.search_financials("line_items", line_items=["revenue"], tickers=["AAPL"])
    result = _fetch(_client(handler), request)

    assert seen["method"] == "POST"
    assert seen["body"]["line_items"] == ["revenue"]
    assert result == [{"ticker": "AAPL"}]


@pytest.mark.parametrize(
    "status, message",
    [
        (401, "Invalid API key"),
        (403, "Access forbidden - endpoint may require a higher subscription tier"),
        (404, "Resource not found"),
        (429, "Rate limit exceeded"),
        (500, "HTTP error 500: boom"),
    ],
)
def test_http_errors_are_mapped(status, message):
    client = _client(lambda request: httpx.Response(status, text="boom"))

    with pytest.raises(UpstreamFetchError) as info:
        _fetch(client, endpoints.financial_metrics_snapshot("AAPL"))

    assert str(info.value) == message
    assert info.value.status_code == status
    assert info.value.endpoint == "/financial-metrics/snapshot"


def test_transport_errors_are_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamFetchError, match="Request failed: connection refused"):
        _fetch(_client(handler), endpoints.crypto_snapshot("BTC-USD"))


def test_connection_test_reports_failure_without_raising():
    client = _client(lambda request: httpx.Response(401))

    async def _run():
        try:
            return await client.test_connection()
        finally:
            await client.close()

    assert asyncio.run(_run()) is False


def test_missing_api_key_is_a_configuration_error():
    with pytest.raises(ConfigurationError, match="API key is required"):
        FinancialDatasetsClient(api_key="")
