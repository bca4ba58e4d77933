# StockMarket/API/ai_tools.py
import logging
from typing import List, Optional

from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError

from StockMarket.Adapters.Outbound.mcp_sampling_adapter import MCPSessionSamplingAdapter
from StockMarket.Domain.analysis_service import DEFAULT_MARKET_TICKERS, FinancialAnalysisService
from StockMarket.Domain.errors import FinancialMCPError

logger = logging.getLogger(__name__)


def register_ai_tools(mcp: FastMCP, service: FinancialAnalysisService) -> None:
    @mcp.tool()
    async def ai_financial_analysis(
        ticker: str,
        ctx: Context,
        analysis_type: str = "comprehensive",
        context: str = "",
        compare_with: Optional[List[str]] = None,
    ) -> str:
        """
        AI-generated analysis of a company, produced by the client's own model.

        analysis_type: comprehensive | valuation | risks | opportunities | comparison.
        compare_with: peer tickers, used when analysis_type is "comparison".
        context: optional extra instructions or background for the analyst.
        """
        try:
            sampler = MCPSessionSamplingAdapter.for_session(ctx.session, logger)
            return await service.analyze_company(sampler, ticker, analysis_type, context, compare_with)
        except ValueError as e:
            raise ToolError(str(e)) from e
        except FinancialMCPError as e:
            logger.error("ai_financial_analysis(%s) failed: %s", ticker, e)
            raise ToolError(f"Failed to perform AI financial analysis: {e}") from e

    @mcp.tool()
    async def ai_market_insights(
        ctx: Context,
        market_focus: str = "overall_market",
        tickers: Optional[List[str]] = None,
        context: str = "",
    ) -> str:
        """
        AI-generated market insights over a basket of tickers.

        market_focus: overall_market | sector_analysis | economic_indicators | risk_assessment.
        tickers: defaults to SPY, QQQ, DIA and IWM.
        """
        try:
            sampler = MCPSessionSamplingAdapter.for_session(ctx.session, logger)
            return await service.market_insights(
                sampler, market_focus, tickers or list(DEFAULT_MARKET_TICKERS), context
            )
        except ValueError as e:
            raise ToolError(str(e)) from e
        except FinancialMCPError as e:
            logger.error("ai_market_insights(%s) failed: %s", market_focus, e)
            raise ToolError(f"Failed to generate AI market insights: {e}") from e
