# StockMarket/API/resources.py
import logging
from typing import Callable

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError

from StockMarket.Domain import endpoints, resource_routes
from StockMarket.Domain.endpoints import UpstreamRequest
from StockMarket.Domain.errors import UpstreamFetchError
from StockMarket.Domain.request_builder import to_pretty_json
from StockMarket.Ports.Outbound.financial_api_interface import FinancialDataAPI

logger = logging.getLogger(__name__)

JSON = "application/json"


async def read_route(api: FinancialDataAPI, build: Callable[[], UpstreamRequest]) -> str:
    """Build the upstream request for a template match and return its payload as JSON."""
    try:
        request = build()
    except ValueError as e:
        raise ResourceError(str(e)) from e
    try:
        return to_pretty_json(await api.fetch(request))
    except UpstreamFetchError as e:
        raise ResourceError(f"Failed to read resource: {e}") from e


async def read_ticker_list(api: FinancialDataAPI, request: UpstreamRequest, fallback: list[str]) -> str:
    """Available tickers, or a fixed list of common ones when the API is unreachable."""
    try:
        tickers = await api.fetch(request)
    except UpstreamFetchError as e:
        logger.warning("Falling back to common tickers for %s: %s", request.path, e)
        tickers = None
    return to_pretty_json(tickers or list(fallback))


def register_resources(mcp: FastMCP, api: FinancialDataAPI) -> None:
    templates = resource_routes.TEMPLATES

    @mcp.resource(resource_routes.STOCK_TICKERS_URI, name="Available stock tickers", mime_type=JSON)
    async def stock_tickers() -> str:
        return await read_ticker_list(api, endpoints.available_tickers(), endpoints.FALLBACK_STOCK_TICKERS)

    @mcp.resource(resource_routes.CRYPTO_TICKERS_URI, name="Available crypto tickers", mime_type=JSON)
    async def crypto_tickers() -> str:
        return await read_ticker_list(api, endpoints.crypto_tickers(), endpoints.FALLBACK_CRYPTO_TICKERS)

    @mcp.resource(templates["company"], name="Company facts", mime_type=JSON)
    async def company(ticker: str) -> str:
        return await read_route(api, lambda: resource_routes.company(ticker))

    @mcp.resource(templates["crypto"], name="Cryptocurrency snapshot", mime_type=JSON)
    async def crypto(ticker: str) -> str:
        return await read_route(api, lambda: resource_routes.crypto(ticker))

    @mcp.resource(templates["prices"], name="Stock price snapshot", mime_type=JSON)
    async def prices(ticker: str, period: str) -> str:
        return await read_route(api, lambda: resource_routes.prices(ticker, period))

    @mcp.resource(templates["crypto_prices"], name="Cryptocurrency price history (30 days)", mime_type=JSON)
    async def crypto_prices(ticker: str, interval: str, interval_multiplier: str) -> str:
        return await read_route(api, lambda: resource_routes.crypto_prices(ticker, interval, interval_multiplier))

    @mcp.resource(templates["press_releases"], name="Earnings press releases", mime_type=JSON)
    async def press_releases(ticker: str) -> str:
        return await read_route(api, lambda: resource_routes.press_releases(ticker))

    @mcp.resource(templates["metrics"], name="Financial metrics", mime_type=JSON)
    async def metrics(ticker: str, period: str) -> str:
        return await read_route(api, lambda: resource_routes.metrics(ticker, period))

    @mcp.resource(templates["financials"], name="Financial statements", mime_type=JSON)
    async def financials(ticker: str, statement_type: str, period: str) -> str:
        return await read_route(api, lambda: resource_routes.financials(ticker, statement_type, period))
