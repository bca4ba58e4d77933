from __future__ import annotations


class FinancialMCPError(Exception):
    """Base class for every error raised by the financial MCP server."""


class ConfigurationError(FinancialMCPError):
    """Required configuration (API key, base URL) is missing or invalid."""


class UpstreamFetchError(FinancialMCPError):
    """The financial-data API call failed."""

    def __init__(self, message: str, endpoint: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class TransportDispatchError(FinancialMCPError):
    """The sampling request could not be delivered to the connected client."""


class SamplingTimeoutError(TransportDispatchError):
    """The client did not answer a sampling request within the configured bound."""

    def __init__(self, timeout: float):
        super().__init__(f"Client did not answer the sampling request within {timeout:g} seconds")
        self.timeout = timeout


class ReplyShapeError(FinancialMCPError):
    """The client answered, but no text content could be found in the reply."""

    def __init__(self, reply_type: str):
        super().__init__(f"No text content in sampling reply (reply type: {reply_type})")
        self.reply_type = reply_type
