from datetime import date

import pytest

from StockMarket.Domain import resource_routes


@pytest.mark.parametrize(
    "build, path, params",
    [
        (lambda: resource_routes.company("aapl"), "/company/facts", {"ticker": "AAPL"}),
        (lambda: resource_routes.crypto("btc-usd"), "/crypto/prices/snapshot", {"ticker": "BTC-USD"}),
        (lambda: resource_routes.prices("MSFT", "1y"), "/prices/snapshot", {"ticker": "MSFT"}),
        (lambda: resource_routes.press_releases("NVDA"), "/earnings/press-releases", {"ticker": "NVDA"}),
        (
            lambda: resource_routes.metrics("AAPL", "quarterly"),
            "/financial-metrics",
            {"ticker": "AAPL", "period": "quarterly", "limit": 4},
        ),
        (
            lambda: resource_routes.financials("AAPL", "cash-flow", "annual"),
            "/financials/cash-flow-statements",
            {"ticker": "AAPL", "period": "annual", "limit": 4},
        ),
        (
            lambda: resource_routes.financials("AAPL", "all", "ttm"),
            "/financials",
            {"ticker": "AAPL", "period": "ttm", "limit": 4},
        ),
    ],
)
def test_template_requests(build, path, params):
    request = build()
    assert request.path == path
    assert dict(request.params) == params


def test_crypto_prices_cover_last_thirty_days():
    request = resource_routes.crypto_prices("eth-usd", "hour", "4", today=date(2024, 3, 31))
    assert request.path == "/crypto/prices/"
    params = dict(request.params)
    assert params["ticker"] == "ETH-USD"
    assert params["interval_multiplier"] == 4
    assert (params["start_date"], params["end_date"]) == ("2024-03-01", "2024-03-31")


def test_non_numeric_multiplier_is_rejected():
    with pytest.raises(ValueError, match="integer"):
        resource_routes.crypto_prices("BTC-USD", "day", "one")


def test_unknown_statement_type_is_rejected():
    with pytest.raises(ValueError, match="Invalid statement type: 'equity'"):
        resource_routes.financials("AAPL", "equity", "annual")
