# StockMarket/API/config.py
import argparse
import os
import tempfile
from typing import Literal, Mapping, Optional, Sequence

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from StockMarket.Domain.errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.financialdatasets.ai"
DEFAULT_LOG_FILE = os.path.join(tempfile.gettempdir(), "financial-mcp.log")
MISSING_KEY_MESSAGE = (
    "Financial Datasets API key is required. Use --api-key argument or set "
    "FINANCIAL_API_KEY environment variable."
)


class FinancialConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = Field(10.0, gt=0)
    sampling_timeout: Optional[float] = Field(120.0, ge=0)
    max_tokens: int = Field(2000, gt=0)
    transport: Literal["stdio", "streamable-http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    verbose: bool = False
    log_file: str = DEFAULT_LOG_FILE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stock-market-mcp-server",
        description="MCP server for the Financial Datasets stock market API",
    )
    parser.add_argument("-k", "--api-key", help="Financial Datasets API key (or FINANCIAL_API_KEY)")
    parser.add_argument("-u", "--base-url", help="API base URL (or FINANCIAL_API_BASE_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--transport", choices=["stdio", "streamable-http"], help="MCP transport (default stdio)")
    parser.add_argument("--host", help="Bind host for streamable-http")
    parser.add_argument("--port", type=int, help="Bind port for streamable-http")
    parser.add_argument(
        "--sampling-timeout",
        type=float,
        help="Seconds to wait for a sampling reply, 0 waits indefinitely (or FINANCIAL_SAMPLING_TIMEOUT)",
    )
    parser.add_argument("--max-tokens", type=int, help="Token budget for AI analysis (or FINANCIAL_MAX_TOKENS)")
    parser.add_argument("--log-file", help="Log file path (or FINANCIAL_MCP_LOG_FILE)")
    return parser


def load_config(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> FinancialConfig:
    """
    Resolve configuration: command-line flags, then environment variables
    (after loading ``.env``), then defaults.
    """
    args = build_parser().parse_args(argv)
    if environ is None:
        load_dotenv()
        environ = os.environ

    api_key = args.api_key or environ.get("FINANCIAL_API_KEY")
    if not api_key:
        raise ConfigurationError(MISSING_KEY_MESSAGE)

    values = {
        "api_key": api_key,
        "base_url": args.base_url or environ.get("FINANCIAL_API_BASE_URL"),
        "sampling_timeout": args.sampling_timeout
        if args.sampling_timeout is not None
        else environ.get("FINANCIAL_SAMPLING_TIMEOUT"),
        "max_tokens": args.max_tokens or environ.get("FINANCIAL_MAX_TOKENS"),
        "transport": args.transport,
        "host": args.host,
        "port": args.port,
        "log_file": args.log_file or environ.get("FINANCIAL_MCP_LOG_FILE"),
        "verbose": args.verbose,
    }
    # unset values fall through to the model defaults
    return FinancialConfig(**{k: v for k, v in values.items() if v not in (None, "")})
