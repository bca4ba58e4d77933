# StockMarket/API/prompts.py
import logging
from datetime import date, timedelta
from typing import Literal

from fastmcp import FastMCP
from fastmcp.exceptions import PromptError
from mcp.types import PromptMessage, TextContent

from StockMarket.Domain import endpoints
from StockMarket.Domain.errors import UpstreamFetchError
from StockMarket.Domain.prompts import client_prompts  # noqa: F401  (registers templates)
from StockMarket.Domain.prompts.registry import REGISTRY
from StockMarket.Domain.utils.concurrency import gather_or_cancel
from StockMarket.Ports.Outbound.financial_api_interface import FinancialDataAPI

logger = logging.getLogger(__name__)


def user_message(text: str) -> PromptMessage:
    return PromptMessage(role="user", content=TextContent(type="text", text=text))


def _messages(prompt_id: str, **values) -> list[PromptMessage]:
    """Data message followed by the instruction message."""
    return [
        user_message(REGISTRY.get(f"{prompt_id}.data").render(**values)),
        user_message(REGISTRY.get(f"{prompt_id}.ask").render()),
    ]


def register_prompts(mcp: FastMCP, api: FinancialDataAPI) -> None:
    @mcp.prompt()
    async def analyze_company(ticker: str) -> list[PromptMessage]:
        """Analyze a company's financial data."""
        if not ticker:
            raise PromptError("Ticker is required for company analysis")
        try:
            facts, snapshot = await gather_or_cancel(
                api.fetch(endpoints.company_facts(ticker)),
                api.fetch(endpoints.stock_price_snapshot(ticker)),
            )
        except UpstreamFetchError as e:
            raise PromptError(f"Failed to analyze company: {e}") from e
        return _messages("client.analyze_company", ticker=ticker, company_facts=facts, price_snapshot=snapshot)

    @mcp.prompt()
    def market_overview() -> list[PromptMessage]:
        """Get an overview of current market conditions."""
        return [user_message(REGISTRY.get("client.market_overview").render())]

    @mcp.prompt()
    async def analyze_crypto(ticker: str) -> list[PromptMessage]:
        """Analyze a cryptocurrency's price data (e.g. BTC-USD)."""
        if not ticker:
            raise PromptError("Ticker is required for cryptocurrency analysis")
        today = date.today()
        history = endpoints.crypto_prices(
            ticker, "day", 1, (today - timedelta(days=30)).isoformat(), today.isoformat(), limit=30
        )
        try:
            snapshot, prices = await gather_or_cancel(
                api.fetch(endpoints.crypto_snapshot(ticker)), api.fetch(history)
            )
        except UpstreamFetchError as e:
            raise PromptError(f"Failed to analyze cryptocurrency: {e}") from e
        return _messages("client.analyze_crypto", ticker=ticker, snapshot=snapshot, prices=prices)

    @mcp.prompt()
    async def analyze_financial_statements(
        ticker: str, period: Literal["annual", "quarterly", "ttm"] = "annual"
    ) -> list[PromptMessage]:
        """Analyze a company's financial statements and metrics."""
        if not ticker:
            raise PromptError("Ticker is required for financial statement analysis")
        try:
            facts, metrics, financials = await gather_or_cancel(
                api.fetch(endpoints.company_facts(ticker)),
                api.fetch(endpoints.financial_metrics_snapshot(ticker)),
                api.fetch(endpoints.all_financial_statements(ticker, period=period, limit=3)),
            )
        except UpstreamFetchError as e:
            raise PromptError(f"Failed to analyze financial statements: {e}") from e
        return _messages(
            "client.analyze_financial_statements",
            ticker=ticker,
            company_facts=facts,
            metrics_snapshot=metrics,
            period=period,
            financials=financials,
        )
