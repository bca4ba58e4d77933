"""
Catalogue of Financial Datasets API requests.

Every function validates its arguments (ValueError with a user-facing
message) and returns an UpstreamRequest. Nothing here performs I/O, so the
adapter only has to execute the request and unwrap ``response_key``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

FILTER_OPERATORS = ("eq", "gt", "gte", "lt", "lte")
SEC_FILING_ITEMS = (
    "Item-1", "Item-1A", "Item-1B", "Item-2", "Item-3", "Item-4", "Item-5", "Item-6",
    "Item-7", "Item-7A", "Item-8", "Item-9", "Item-9A", "Item-9B", "Item-10", "Item-11",
    "Item-12", "Item-13", "Item-14", "Item-15", "Item-16",
)
FALLBACK_STOCK_TICKERS = ["AAPL", "MSFT", "GOOGL", "AMZN", "META"]
FALLBACK_CRYPTO_TICKERS = ["BTC-USD", "ETH-USD", "SOL-USD", "DOGE-USD", "XRP-USD"]


@dataclass(frozen=True)
class UpstreamRequest:
    path: str
    action: str
    params: tuple[tuple[str, Any], ...] = ()
    response_key: Optional[str] = None
    method: str = "GET"
    body: Optional[dict] = field(default=None, compare=False)


def _query(*pairs: tuple[str, Any]) -> tuple[tuple[str, Any], ...]:
    """Drop unset values; keep order (and repeated keys) as given."""
    return tuple((k, v) for k, v in pairs if v is not None and v != "")


def _require(value: Any, message: str) -> None:
    if not value:
        raise ValueError(message)


def _ticker_or_cik(ticker: str | None, cik: str | None) -> tuple[str, str]:
    if ticker:
        return "ticker", ticker
    if cik:
        return "cik", cik
    raise ValueError("Either ticker or CIK is required")


# -------------------------------------------------------------
# Company & prices
# -------------------------------------------------------------
def company_facts(ticker: str | None = None, cik: str | None = None) -> UpstreamRequest:
    key, value = _ticker_or_cik(ticker, cik)
    return UpstreamRequest("/company/facts", "get company facts", _query((key, value)), "company_facts")


def available_tickers() -> UpstreamRequest:
    return UpstreamRequest("/company/facts/tickers/", "list tickers", response_key="tickers")


def crypto_tickers() -> UpstreamRequest:
    return UpstreamRequest("/crypto/prices/tickers/", "list crypto tickers", response_key="tickers")


def stock_price_snapshot(ticker: str | None, action: str = "get stock price snapshot") -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    return UpstreamRequest("/prices/snapshot", action, _query(("ticker", ticker)), "snapshot")


def stock_prices(ticker: str | None, period: str = "1m", limit: int = 30) -> UpstreamRequest:
    # The basic price tool is served from the snapshot endpoint; period/limit are informational.
    return stock_price_snapshot(ticker, action="get stock prices")


def _ranged_prices(
    path: str,
    action: str,
    ticker: str | None,
    interval: str | None,
    interval_multiplier: int | None,
    start_date: str | None,
    end_date: str | None,
    limit: int,
) -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    _require(interval, "Interval is required")
    if not interval_multiplier or interval_multiplier < 1:
        raise ValueError("Interval multiplier must be at least 1")
    _require(start_date, "Start date is required")
    _require(end_date, "End date is required")
    params = _query(
        ("ticker", ticker),
        ("interval", interval),
        ("interval_multiplier", interval_multiplier),
        ("start_date", start_date),
        ("end_date", end_date),
        ("limit", limit),
    )
    return UpstreamRequest(path, action, params, "prices")


def stock_prices_advanced(
    ticker: str | None,
    interval: str | None,
    interval_multiplier: int | None,
    start_date: str | None,
    end_date: str | None,
    limit: int = 5000,
) -> UpstreamRequest:
    return _ranged_prices(
        "/prices/", "get stock prices", ticker, interval, interval_multiplier, start_date, end_date, limit
    )


def crypto_prices(
    ticker: str | None,
    interval: str | None,
    interval_multiplier: int | None,
    start_date: str | None,
    end_date: str | None,
    limit: int = 5000,
) -> UpstreamRequest:
    return _ranged_prices(
        "/crypto/prices/", "get crypto prices", ticker, interval, interval_multiplier, start_date, end_date, limit
    )


def crypto_snapshot(ticker: str | None) -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    return UpstreamRequest("/crypto/prices/snapshot", "get crypto snapshot", _query(("ticker", ticker)), "snapshot")


def earnings_press_releases(ticker: str | None) -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    return UpstreamRequest(
        "/earnings/press-releases", "get earnings press releases", _query(("ticker", ticker)), "press_releases"
    )


# -------------------------------------------------------------
# Metrics & statements
# -------------------------------------------------------------
def financial_metrics(
    ticker: str | None,
    period: str = "annual",
    limit: int = 4,
    report_period_gte: str | None = None,
    report_period_lte: str | None = None,
) -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    params = _query(
        ("ticker", ticker),
        ("period", period),
        ("limit", limit),
        ("report_period_gte", report_period_gte),
        ("report_period_lte", report_period_lte),
    )
    return UpstreamRequest("/financial-metrics", "get financial metrics", params, "financial_metrics")


def financial_metrics_snapshot(ticker: str | None) -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    return UpstreamRequest(
        "/financial-metrics/snapshot", "get financial metrics snapshot", _query(("ticker", ticker)), "snapshot"
    )


def _statements(
    path: str,
    response_key: str,
    action: str,
    ticker: str | None,
    cik: str | None,
    period: str,
    limit: int,
    report_period_gte: str | None,
    report_period_lte: str | None,
) -> UpstreamRequest:
    key, value = _ticker_or_cik(ticker, cik)
    params = _query(
        (key, value),
        ("period", period),
        ("limit", limit),
        ("report_period_gte", report_period_gte),
        ("report_period_lte", report_period_lte),
    )
    return UpstreamRequest(path, action, params, response_key)


def income_statements(ticker=None, cik=None, period="annual", limit=4, report_period_gte=None, report_period_lte=None):
    return _statements(
        "/financials/income-statements", "income_statements", "get income statements",
        ticker, cik, period, limit, report_period_gte, report_period_lte,
    )


def balance_sheets(ticker=None, cik=None, period="annual", limit=4, report_period_gte=None, report_period_lte=None):
    return _statements(
        "/financials/balance-sheets", "balance_sheets", "get balance sheets",
        ticker, cik, period, limit, report_period_gte, report_period_lte,
    )


def cash_flow_statements(ticker=None, cik=None, period="annual", limit=4, report_period_gte=None, report_period_lte=None):
    return _statements(
        "/financials/cash-flow-statements", "cash_flow_statements", "get cash flow statements",
        ticker, cik, period, limit, report_period_gte, report_period_lte,
    )


def all_financial_statements(ticker=None, cik=None, period="annual", limit=4, report_period_gte=None, report_period_lte=None):
    return _statements(
        "/financials", "financials", "get all financial statements",
        ticker, cik, period, limit, report_period_gte, report_period_lte,
    )


def segmented_revenues(
    period: str | None,
    ticker: str | None = None,
    cik: str | None = None,
    limit: int = 4,
) -> UpstreamRequest:
    _require(period, "Period is required (annual or quarterly)")
    key, value = _ticker_or_cik(ticker, cik)
    params = _query(("period", period), ("limit", limit), (key, value))
    return UpstreamRequest(
        "/financials/segmented-revenues/", "get segmented revenues", params, "segmented_revenues"
    )


def search_financials(
    search_type: str | None,
    filters: list[dict] | None = None,
    line_items: list[str] | None = None,
    tickers: list[str] | None = None,
    period: str = "ttm",
    limit: int = 100,
    currency: str = "USD",
    order_by: str = "ticker",
) -> UpstreamRequest:
    _require(search_type, "Search type is required")

    if search_type == "filters":
        if not filters:
            raise ValueError("At least one filter is required for filters search type")
        for f in filters:
            if f.get("operator") not in FILTER_OPERATORS:
                raise ValueError(
                    f"Invalid filter operator: {f.get('operator')!r}. Valid options: {', '.join(FILTER_OPERATORS)}"
                )
        body = {
            "filters": filters,
            "period": period,
            "limit": limit,
            "currency": currency,
            "order_by": order_by,
        }
        return UpstreamRequest("/financials/search", "search financials", (), "search_results", "POST", body)

    if search_type == "line_items":
        if not line_items:
            raise ValueError("At least one line item is required for line_items search type")
        if not tickers:
            raise ValueError("At least one ticker is required for line_items search type")
        body = {
            "line_items": line_items,
            "tickers": tickers,
            "period": period,
            "limit": limit,
        }
        return UpstreamRequest(
            "/financials/search/line-items", "search financials", (), "search_results", "POST", body
        )

    raise ValueError(f"Invalid search type: {search_type}. Must be 'filters' or 'line_items'")


# -------------------------------------------------------------
# Ownership, insiders, news
# -------------------------------------------------------------
def insider_trades(
    ticker: str | None,
    limit: int = 100,
    filing_date_gte: str | None = None,
    filing_date_lte: str | None = None,
) -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    params = _query(
        ("ticker", ticker),
        ("limit", limit),
        ("filing_date_gte", filing_date_gte),
        ("filing_date_lte", filing_date_lte),
    )
    return UpstreamRequest("/insider-trades", "get insider trades", params, "insider_trades")


def _ownership(key: str, value: str, limit: int, gte: str | None, lte: str | None) -> UpstreamRequest:
    params = _query((key, value), ("limit", limit), ("report_period_gte", gte), ("report_period_lte", lte))
    return UpstreamRequest(
        "/institutional-ownership", "get institutional ownership data", params, "institutional_ownership"
    )


def institutional_ownership_by_investor(
    investor: str | None,
    limit: int = 10,
    report_period_gte: str | None = None,
    report_period_lte: str | None = None,
) -> UpstreamRequest:
    _require(investor, "Investor name is required")
    return _ownership("investor", investor, limit, report_period_gte, report_period_lte)


def institutional_ownership_by_ticker(
    ticker: str | None,
    limit: int = 10,
    report_period_gte: str | None = None,
    report_period_lte: str | None = None,
) -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    return _ownership("ticker", ticker, limit, report_period_gte, report_period_lte)


def company_news(
    ticker: str | None,
    start_date: str | None = None,
    end_date: str | None = None,
    limit: int = 100,
) -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    params = _query(("ticker", ticker), ("start_date", start_date), ("end_date", end_date), ("limit", limit))
    return UpstreamRequest("/news", "get company news", params, "news")


# -------------------------------------------------------------
# SEC filings
# -------------------------------------------------------------
def sec_filing_items(
    ticker: str | None,
    filing_type: str | None,
    year: int | None,
    quarter: int | None = None,
    items: Iterable[str] | None = None,
) -> UpstreamRequest:
    _require(ticker, "Ticker is required")
    _require(filing_type, "Filing type is required")
    if not year or year <= 0:
        raise ValueError("Valid year is required")
    if filing_type == "10-Q" and (not quarter or quarter < 1 or quarter > 4):
        raise ValueError("Valid quarter (1-4) is required for 10-Q filings")

    items = list(items or [])
    unknown = [i for i in items if i not in SEC_FILING_ITEMS]
    if unknown:
        raise ValueError(f"Unknown filing items: {', '.join(unknown)}")

    pairs = [("ticker", ticker), ("filing_type", filing_type), ("year", year)]
    if filing_type == "10-Q":
        pairs.append(("quarter", quarter))
    pairs.extend(("item", item) for item in items)
    return UpstreamRequest("/filings/items", "get SEC filing items", _query(*pairs))


def sec_filings(
    ticker: str | None = None,
    cik: str | None = None,
    filing_type: str | None = None,
) -> UpstreamRequest:
    key, value = _ticker_or_cik(ticker, cik)
    params = _query((key, value), ("filing_type", filing_type))
    return UpstreamRequest("/filings", "get SEC filings", params, "filings")


def filter_tickers(tickers: Iterable[str], query: str, limit: int = 10) -> dict:
    """Case-insensitive substring search over a ticker list."""
    _require(query, "Search query is required")
    needle = query.lower()
    matches = [t for t in tickers if needle in t.lower()][:limit]
    return {
        "query": query,
        "results": matches,
        "total_found": len(matches),
        "note": (
            "This is a basic ticker symbol search. For more advanced company searching, "
            "consider using the search_financials tool with filters."
        ),
    }
