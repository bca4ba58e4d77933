# StockMarket/API/cli.py
import asyncio
import logging
import sys
from typing import Optional, Sequence

from StockMarket.Adapters.Outbound.financial_datasets_adapter import FinancialDatasetsClient
from StockMarket.API.config import load_config
from StockMarket.API.logging_config import configure_logging
from StockMarket.API.server import create_server
from StockMarket.Domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


async def _check_upstream(client: FinancialDatasetsClient) -> bool:
    try:
        return await client.test_connection()
    finally:
        await client.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = load_config(argv)
    except ConfigurationError as e:
        configure_logging()
        logger.error("%s", e)
        return 1

    configure_logging(config.log_file, config.verbose)
    logger.info("Starting Financial Datasets MCP server (transport=%s)", config.transport)
    logger.info("Logging to %s", config.log_file)

    # best effort, a failed check only gets logged
    probe = FinancialDatasetsClient(config.api_key, config.base_url, config.request_timeout)
    asyncio.run(_check_upstream(probe))

    mcp = create_server(config)
    if config.transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport=config.transport, host=config.host, port=config.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
