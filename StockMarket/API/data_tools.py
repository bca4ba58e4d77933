# StockMarket/API/data_tools.py
"""
Plain data-retrieval tools. Each tool builds one request from the endpoint
catalogue, executes it and returns the unwrapped payload as pretty JSON.
"""

import logging
from typing import Callable, List, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from StockMarket.Domain import endpoints
from StockMarket.Domain.endpoints import UpstreamRequest
from StockMarket.Domain.errors import UpstreamFetchError
from StockMarket.Domain.request_builder import to_pretty_json
from StockMarket.Ports.Outbound.financial_api_interface import FinancialDataAPI

logger = logging.getLogger(__name__)

Period = Literal["annual", "quarterly", "ttm"]
Interval = Literal["second", "minute", "day", "week", "month", "year"]


def build_or_raise(build: Callable[[], UpstreamRequest]) -> UpstreamRequest:
    try:
        return build()
    except ValueError as e:
        raise ToolError(str(e)) from e


async def fetch_or_raise(api: FinancialDataAPI, request: UpstreamRequest):
    try:
        return await api.fetch(request)
    except UpstreamFetchError as e:
        raise ToolError(f"Failed to {request.action}: {e}") from e


async def run_request(api: FinancialDataAPI, build: Callable[[], UpstreamRequest]) -> str:
    request = build_or_raise(build)
    return to_pretty_json(await fetch_or_raise(api, request))


def register_data_tools(mcp: FastMCP, api: FinancialDataAPI) -> None:
    # ---------------- company & prices ----------------
    @mcp.tool()
    async def get_company_facts(ticker: Optional[str] = None, cik: Optional[str] = None) -> str:
        """Company facts (name, CIK, sector, industry, exchange, ...) by ticker or CIK."""
        return await run_request(api, lambda: endpoints.company_facts(ticker, cik))

    @mcp.tool()
    async def get_stock_prices(ticker: str, period: str = "1m", limit: int = 30) -> str:
        """Latest price snapshot for a stock ticker."""
        return await run_request(api, lambda: endpoints.stock_prices(ticker, period, limit))

    @mcp.tool()
    async def search_companies(query: str, limit: int = 10) -> str:
        """Search ticker symbols by case-insensitive substring."""
        if not query:
            raise ToolError("Search query is required")
        tickers = await fetch_or_raise(api, endpoints.available_tickers())
        try:
            return to_pretty_json(endpoints.filter_tickers(tickers or [], query, limit))
        except ValueError as e:
            raise ToolError(str(e)) from e

    @mcp.tool()
    async def get_stock_price_snapshot(ticker: str) -> str:
        """Real-time price snapshot for a stock ticker."""
        return await run_request(api, lambda: endpoints.stock_price_snapshot(ticker))

    @mcp.tool()
    async def get_stock_prices_advanced(
        ticker: str,
        interval: Interval,
        interval_multiplier: int,
        start_date: str,
        end_date: str,
        limit: int = 5000,
    ) -> str:
        """Historical OHLCV prices for a stock over a date range (dates as YYYY-MM-DD)."""
        return await run_request(
            api,
            lambda: endpoints.stock_prices_advanced(
                ticker, interval, interval_multiplier, start_date, end_date, limit
            ),
        )

    @mcp.tool()
    async def get_crypto_prices(
        ticker: str,
        interval: Interval,
        interval_multiplier: int,
        start_date: str,
        end_date: str,
        limit: int = 5000,
    ) -> str:
        """Historical prices for a cryptocurrency pair such as BTC-USD."""
        return await run_request(
            api,
            lambda: endpoints.crypto_prices(ticker, interval, interval_multiplier, start_date, end_date, limit),
        )

    @mcp.tool()
    async def get_crypto_snapshot(ticker: str) -> str:
        """Real-time price snapshot for a cryptocurrency pair."""
        return await run_request(api, lambda: endpoints.crypto_snapshot(ticker))

    @mcp.tool()
    async def get_earnings_press_releases(ticker: str) -> str:
        return await run_request(api, lambda: endpoints.earnings_press_releases(ticker))

    # ---------------- metrics & statements ----------------
    @mcp.tool()
    async def get_financial_metrics(
        ticker: str,
        period: Period = "annual",
        limit: int = 4,
        report_period_gte: Optional[str] = None,
        report_period_lte: Optional[str] = None,
    ) -> str:
        """Historical financial metrics (valuation, profitability, growth ratios)."""
        return await run_request(
            api,
            lambda: endpoints.financial_metrics(ticker, period, limit, report_period_gte, report_period_lte),
        )

    @mcp.tool()
    async def get_financial_metrics_snapshot(ticker: str) -> str:
        """Current financial metrics for a company."""
        return await run_request(api, lambda: endpoints.financial_metrics_snapshot(ticker))

    @mcp.tool()
    async def get_income_statements(
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        period: Period = "annual",
        limit: int = 4,
        report_period_gte: Optional[str] = None,
        report_period_lte: Optional[str] = None,
    ) -> str:
        return await run_request(
            api,
            lambda: endpoints.income_statements(ticker, cik, period, limit, report_period_gte, report_period_lte),
        )

    @mcp.tool()
    async def get_balance_sheets(
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        period: Period = "annual",
        limit: int = 4,
        report_period_gte: Optional[str] = None,
        report_period_lte: Optional[str] = None,
    ) -> str:
        return await run_request(
            api,
            lambda: endpoints.balance_sheets(ticker, cik, period, limit, report_period_gte, report_period_lte),
        )

    @mcp.tool()
    async def get_cash_flow_statements(
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        period: Period = "annual",
        limit: int = 4,
        report_period_gte: Optional[str] = None,
        report_period_lte: Optional[str] = None,
    ) -> str:
        return await run_request(
            api,
            lambda: endpoints.cash_flow_statements(ticker, cik, period, limit, report_period_gte, report_period_lte),
        )

    @mcp.tool()
    async def get_all_financial_statements(
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        period: Period = "annual",
        limit: int = 4,
        report_period_gte: Optional[str] = None,
        report_period_lte: Optional[str] = None,
    ) -> str:
        """Income statement, balance sheet and cash flow statement in one call."""
        return await run_request(
            api,
            lambda: endpoints.all_financial_statements(
                ticker, cik, period, limit, report_period_gte, report_period_lte
            ),
        )

    @mcp.tool()
    async def get_segmented_revenues(
        period: Literal["annual", "quarterly"],
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        limit: int = 4,
    ) -> str:
        """Revenue broken down by product and geographic segment."""
        return await run_request(api, lambda: endpoints.segmented_revenues(period, ticker, cik, limit))

    @mcp.tool()
    async def search_financials(
        search_type: Literal["filters", "line_items"],
        filters: Optional[List[dict]] = None,
        line_items: Optional[List[str]] = None,
        tickers: Optional[List[str]] = None,
        period: Period = "ttm",
        limit: int = 100,
        currency: str = "USD",
        order_by: str = "ticker",
    ) -> str:
        """
        Screen companies by financial criteria.

        ``filters`` mode takes ``[{"field": ..., "operator": "gt|gte|lt|lte|eq", "value": ...}]``;
        ``line_items`` mode returns the named line items for the given tickers.
        """
        return await run_request(
            api,
            lambda: endpoints.search_financials(
                search_type, filters, line_items, tickers, period, limit, currency, order_by
            ),
        )

    # ---------------- ownership, insiders, news ----------------
    @mcp.tool()
    async def get_insider_trades(
        ticker: str,
        limit: int = 100,
        filing_date_gte: Optional[str] = None,
        filing_date_lte: Optional[str] = None,
    ) -> str:
        return await run_request(
            api, lambda: endpoints.insider_trades(ticker, limit, filing_date_gte, filing_date_lte)
        )

    @mcp.tool()
    async def get_institutional_ownership_by_investor(
        investor: str,
        limit: int = 10,
        report_period_gte: Optional[str] = None,
        report_period_lte: Optional[str] = None,
    ) -> str:
        """Holdings of an institutional investor (e.g. BERKSHIRE_HATHAWAY_INC)."""
        return await run_request(
            api,
            lambda: endpoints.institutional_ownership_by_investor(
                investor, limit, report_period_gte, report_period_lte
            ),
        )

    @mcp.tool()
    async def get_institutional_ownership_by_ticker(
        ticker: str,
        limit: int = 10,
        report_period_gte: Optional[str] = None,
        report_period_lte: Optional[str] = None,
    ) -> str:
        """Institutional investors holding a given ticker."""
        return await run_request(
            api,
            lambda: endpoints.institutional_ownership_by_ticker(ticker, limit, report_period_gte, report_period_lte),
        )

    @mcp.tool()
    async def get_company_news(
        ticker: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 100,
    ) -> str:
        return await run_request(api, lambda: endpoints.company_news(ticker, start_date, end_date, limit))

    # ---------------- SEC filings ----------------
    @mcp.tool()
    async def get_sec_filings(
        ticker: Optional[str] = None,
        cik: Optional[str] = None,
        filing_type: Optional[Literal["10-K", "10-Q", "8-K", "4", "144"]] = None,
    ) -> str:
        return await run_request(api, lambda: endpoints.sec_filings(ticker, cik, filing_type))

    @mcp.tool()
    async def get_sec_filing_items(
        ticker: str,
        filing_type: Literal["10-K", "10-Q"],
        year: int,
        quarter: Optional[int] = None,
        items: Optional[List[str]] = None,
    ) -> str:
        """Specific sections (Item-1, Item-1A, Item-7, ...) of a 10-K or 10-Q filing. ``quarter`` is required for 10-Q."""
        return await run_request(
            api, lambda: endpoints.sec_filing_items(ticker, filing_type, year, quarter, items)
        )

    logger.debug("Registered data tools")
