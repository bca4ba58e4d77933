# StockMarket/API/server.py
import logging
from typing import Optional

from fastmcp import FastMCP

from StockMarket.Adapters.Outbound.financial_datasets_adapter import FinancialDatasetsClient
from StockMarket.API.ai_tools import register_ai_tools
from StockMarket.API.config import FinancialConfig
from StockMarket.API.data_tools import register_data_tools
from StockMarket.API.prompts import register_prompts
from StockMarket.API.resources import register_resources
from StockMarket.Domain.analysis_service import FinancialAnalysisService
from StockMarket.Ports.Outbound.financial_api_interface import FinancialDataAPI

logger = logging.getLogger(__name__)

SERVER_NAME = "Financial Datasets"


def create_server(config: FinancialConfig, api: Optional[FinancialDataAPI] = None) -> FastMCP:
    """Wire the upstream client, analysis service and every tool, resource and prompt."""
    if api is None:
        api = FinancialDatasetsClient(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.request_timeout,
        )

    service = FinancialAnalysisService(
        api,
        logger=logging.getLogger("StockMarket.analysis"),
        max_tokens=config.max_tokens,
        sampling_timeout=config.sampling_timeout,
    )

    mcp = FastMCP(name=SERVER_NAME)
    register_data_tools(mcp, api)
    register_ai_tools(mcp, service)
    register_resources(mcp, api)
    register_prompts(mcp, api)

    logger.info("MCP server %r ready (upstream %s)", SERVER_NAME, config.base_url)
    return mcp
