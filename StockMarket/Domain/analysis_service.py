from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from StockMarket.Domain import endpoints
from StockMarket.Domain.analysis_type_enum import (
    CompanyAnalysisType,
    MarketInsightType,
    parse_choice,
)
from StockMarket.Domain.errors import UpstreamFetchError
from StockMarket.Domain.generation_request import DEFAULT_MAX_TOKENS
from StockMarket.Domain.request_builder import (
    UnavailableData,
    build_company_analysis_request,
    build_market_insights_request,
)
from StockMarket.Domain.response_resolver import SamplingOutcome, SamplingResponseResolver
from StockMarket.Domain.utils.concurrency import gather_or_cancel
from StockMarket.Domain.utils.provenance import wrap_with_provenance
from StockMarket.Ports.Outbound.financial_api_interface import FinancialDataAPI
from StockMarket.Ports.Outbound.sampling_interface import SamplingTransport

logger = logging.getLogger(__name__)

DEFAULT_MARKET_TICKERS = ("SPY", "QQQ", "DIA", "IWM")
FALLBACK_NOTE = "The connected client's sampling reply could not be read; the text above is a fallback message."


class FinancialAnalysisService:
    """
    Drives the AI analysis tools: fetch upstream data, build the sampling
    request, resolve the client's reply and append provenance.
    """

    def __init__(
        self,
        api: FinancialDataAPI,
        logger: logging.Logger | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        sampling_timeout: float | None = None,
    ):
        self.api = api
        self.logger = logger or logging.getLogger(__name__)
        self.max_tokens = max_tokens
        self.sampling_timeout = sampling_timeout

    # ---------- fetching ----------
    async def _fetch_optional(self, request: endpoints.UpstreamRequest) -> Any:
        """Fetch one sub-component; a failure becomes an UnavailableData marker."""
        try:
            return await self.api.fetch(request)
        except UpstreamFetchError as e:
            self.logger.warning("Partial data: %s unavailable (%s)", request.path, e)
            return UnavailableData(str(e))

    # ---------- sampling ----------
    async def _resolve(self, sampler: SamplingTransport, request) -> SamplingOutcome:
        resolver = SamplingResponseResolver(sampler, timeout=self.sampling_timeout, logger=self.logger)
        return await resolver.resolve(request)

    @staticmethod
    def _finish(outcome: SamplingOutcome, sources: Iterable[str]) -> str:
        note = FALLBACK_NOTE if outcome.used_fallback else None
        return wrap_with_provenance(outcome.text, sources, note=note)

    # ---------- public ----------
    async def analyze_company(
        self,
        sampler: SamplingTransport,
        ticker: str,
        analysis_type: str = CompanyAnalysisType.COMPREHENSIVE.value,
        context: str = "",
        compare_with: Optional[Iterable[str]] = None,
    ) -> str:
        if not ticker or not ticker.strip():
            raise ValueError("Ticker is required")
        kind = parse_choice(CompanyAnalysisType, analysis_type, "analysis_type")
        ticker = ticker.strip().upper()

        requests = (
            endpoints.company_facts(ticker),
            endpoints.financial_metrics_snapshot(ticker),
            endpoints.stock_price_snapshot(ticker),
        )
        facts, metrics, price = await gather_or_cancel(*(self.api.fetch(r) for r in requests))
        data: dict[str, Any] = {
            "Company Facts": facts,
            "Financial Metrics": metrics,
            "Current Price": price,
        }
        sources = [f"{r.path} ({ticker})" for r in requests]

        # order-preserving dedupe
        peers = list(dict.fromkeys(p.strip().upper() for p in (compare_with or []) if p and p.strip()))
        peers = [p for p in peers if p != ticker]
        if kind is CompanyAnalysisType.COMPARISON and peers:
            peer_requests = [endpoints.financial_metrics_snapshot(p) for p in peers]
            peer_data = await gather_or_cancel(*(self._fetch_optional(r) for r in peer_requests))
            for peer, value in zip(peers, peer_data):
                data[f"Peer Financial Metrics ({peer})"] = value
            available = [p for p, v in zip(peers, peer_data) if not isinstance(v, UnavailableData)]
            if available:
                sources.append(f"/financial-metrics/snapshot ({', '.join(available)})")

        self.logger.info("Running %s analysis for %s (%d data sections)", kind.value, ticker, len(data))
        request = build_company_analysis_request(ticker, data, kind, context, max_tokens=self.max_tokens)
        outcome = await self._resolve(sampler, request)
        return self._finish(outcome, sources)

    async def market_insights(
        self,
        sampler: SamplingTransport,
        market_focus: str = MarketInsightType.OVERALL_MARKET.value,
        tickers: Optional[Iterable[str]] = None,
        context: str = "",
    ) -> str:
        kind = parse_choice(MarketInsightType, market_focus, "market_focus")
        symbols = list(dict.fromkeys(t.strip().upper() for t in (tickers or DEFAULT_MARKET_TICKERS) if t and t.strip()))
        if not symbols:
            symbols = list(DEFAULT_MARKET_TICKERS)

        snapshots = await gather_or_cancel(
            *(self._fetch_optional(endpoints.stock_price_snapshot(s)) for s in symbols)
        )
        available = [s for s, v in zip(symbols, snapshots) if not isinstance(v, UnavailableData)]
        if not available:
            reasons = "; ".join(f"{s}: {v.reason}" for s, v in zip(symbols, snapshots))
            raise UpstreamFetchError(f"No market data available ({reasons})", endpoint="/prices/snapshot")

        data = {f"Price Snapshot ({s})": v for s, v in zip(symbols, snapshots)}
        self.logger.info("Running %s market insights over %s", kind.value, ", ".join(symbols))
        request = build_market_insights_request(data, kind, context, max_tokens=self.max_tokens)
        outcome = await self._resolve(sampler, request)
        return self._finish(outcome, [f"/prices/snapshot ({', '.join(available)})"])
