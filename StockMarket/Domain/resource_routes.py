"""
financial:// resource URIs and the upstream requests behind them.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from StockMarket.Domain import endpoints
from StockMarket.Domain.endpoints import UpstreamRequest

CRYPTO_HISTORY_DAYS = 30
STATEMENT_TYPES = {
    "income": endpoints.income_statements,
    "balance": endpoints.balance_sheets,
    "cash-flow": endpoints.cash_flow_statements,
    "all": endpoints.all_financial_statements,
}

STOCK_TICKERS_URI = "financial://tickers/stocks"
CRYPTO_TICKERS_URI = "financial://tickers/crypto"

TEMPLATES = {
    "company": "financial://company/{ticker}",
    "crypto": "financial://crypto/{ticker}",
    "prices": "financial://prices/{ticker}/{period}",
    "crypto_prices": "financial://crypto/prices/{ticker}/{interval}/{interval_multiplier}",
    "press_releases": "financial://earnings/{ticker}/press-releases",
    "metrics": "financial://metrics/{ticker}/{period}",
    "financials": "financial://financials/{ticker}/{statement_type}/{period}",
}


def company(ticker: str) -> UpstreamRequest:
    return endpoints.company_facts(ticker.upper())


def crypto(ticker: str) -> UpstreamRequest:
    return endpoints.crypto_snapshot(ticker.upper())


def prices(ticker: str, period: str) -> UpstreamRequest:
    return endpoints.stock_prices(ticker.upper(), period=period)


def crypto_prices(ticker: str, interval: str, interval_multiplier: str | int, today: Optional[date] = None) -> UpstreamRequest:
    try:
        multiplier = int(interval_multiplier)
    except (TypeError, ValueError):
        raise ValueError(f"Interval multiplier must be an integer, got {interval_multiplier!r}") from None
    end = today or date.today()
    start = end - timedelta(days=CRYPTO_HISTORY_DAYS)
    return endpoints.crypto_prices(
        ticker.upper(), interval, multiplier, start.isoformat(), end.isoformat()
    )


def press_releases(ticker: str) -> UpstreamRequest:
    return endpoints.earnings_press_releases(ticker.upper())


def metrics(ticker: str, period: str) -> UpstreamRequest:
    return endpoints.financial_metrics(ticker.upper(), period=period)


def financials(ticker: str, statement_type: str, period: str) -> UpstreamRequest:
    builder = STATEMENT_TYPES.get(statement_type)
    if builder is None:
        raise ValueError(
            f"Invalid statement type: '{statement_type}'. Valid options: {', '.join(STATEMENT_TYPES)}"
        )
    return builder(ticker=ticker.upper(), period=period)
