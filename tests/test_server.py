import asyncio

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from StockMarket.API.config import FinancialConfig
from StockMarket.API.data_tools import run_request
from StockMarket.API.server import create_server
from StockMarket.Domain import endpoints

DATA_TOOLS = {
    "get_company_facts",
    "get_stock_prices",
    "search_companies",
    "get_crypto_prices",
    "get_crypto_snapshot",
    "get_earnings_press_releases",
    "get_financial_metrics",
    "get_financial_metrics_snapshot",
    "get_income_statements",
    "get_balance_sheets",
    "get_cash_flow_statements",
    "get_all_financial_statements",
    "get_insider_trades",
    "get_institutional_ownership_by_investor",
    "get_institutional_ownership_by_ticker",
    "get_company_news",
    "search_financials",
    "get_stock_price_snapshot",
    "get_stock_prices_advanced",
    "get_sec_filing_items",
    "get_segmented_revenues",
    "get_sec_filings",
}


@pytest.fixture
def server(apple_api):
    return create_server(FinancialConfig(api_key="test-key", sampling_timeout=5), api=apple_api)


def test_registers_every_tool_resource_and_prompt(server):
    async def _list():
        async with Client(server) as client:
            tools = await client.list_tools()
            templates = await client.list_resource_templates()
            resources = await client.list_resources()
            prompts = await client.list_prompts()
        return tools, templates, resources, prompts

    tools, templates, resources, prompts = asyncio.run(_list())

    assert {t.name for t in tools} == DATA_TOOLS | {"ai_financial_analysis", "ai_market_insights"}
    assert "financial://company/{ticker}" in {t.uriTemplate for t in templates}
    assert "financial://financials/{ticker}/{statement_type}/{period}" in {t.uriTemplate for t in templates}
    assert {str(r.uri) for r in resources} == {"financial://tickers/stocks", "financial://tickers/crypto"}
    assert {p.name for p in prompts} == {
        "analyze_company",
        "market_overview",
        "analyze_crypto",
        "analyze_financial_statements",
    }


def test_ai_financial_analysis_samples_through_the_client(server):
    seen = {}

    async def sampling_handler(messages, params, context):
        seen["prompt"] = messages[0].content.text
        seen["max_tokens"] = params.maxTokens
        return "Apple shows strong fundamentals."

    async def _call():
        async with Client(server, sampling_handler=sampling_handler) as client:
            return await client.call_tool("ai_financial_analysis", {"ticker": "AAPL"})

    result = asyncio.run(_call())

    text = result.content[0].text
    assert text.startswith("Apple shows strong fundamentals.")
    assert "*Data sources:" in text
    assert '"name": "Apple Inc."' in seen["prompt"]
    assert seen["max_tokens"] == 2000


def test_prompt_embeds_fetched_data(server):
    async def _get():
        async with Client(server) as client:
            return await client.get_prompt("analyze_company", {"ticker": "AAPL"})

    result = asyncio.run(_get())

    assert len(result.messages) == 2
    assert "Apple Inc." in result.messages[0].content.text
    assert "strengths, weaknesses" in result.messages[1].content.text


def test_ticker_resource_falls_back_to_common_list(server):
    async def _read():
        async with Client(server) as client:
            return await client.read_resource("financial://tickers/crypto")

    contents = asyncio.run(_read())
    assert "BTC-USD" in contents[0].text


class TestRunRequest:
    def test_validation_errors_become_tool_errors(self, apple_api):
        with pytest.raises(ToolError, match="Ticker is required"):
            asyncio.run(run_request(apple_api, lambda: endpoints.crypto_snapshot("")))

    def test_upstream_errors_name_the_action(self, apple_api):
        with pytest.raises(ToolError, match="Failed to get crypto snapshot: Resource not found"):
            asyncio.run(run_request(apple_api, lambda: endpoints.crypto_snapshot("BTC-USD")))

    def test_returns_pretty_json(self, apple_api):
        text = asyncio.run(run_request(apple_api, lambda: endpoints.company_facts("AAPL")))
        assert text == '{\n  "name": "Apple Inc."\n}'


class TestResourceReads:
    def test_template_resource_reads_upstream_data(self, server):
        async def _read():
            async with Client(server) as client:
                return await client.read_resource("financial://company/aapl")

        contents = asyncio.run(_read())
        assert '"name": "Apple Inc."' in contents[0].text

    def test_invalid_statement_type_names_accepted_values(self, server):
        async def _read():
            async with Client(server) as client:
                return await client.read_resource("financial://financials/AAPL/equity/annual")

        with pytest.raises(Exception, match="Invalid statement type: 'equity'"):
            asyncio.run(_read())

    def test_unknown_uri_is_rejected(self, server):
        async def _read():
            async with Client(server) as client:
                return await client.read_resource("financial://weather/NYC")

        with pytest.raises(Exception, match="financial://weather/NYC"):
            asyncio.run(_read())
