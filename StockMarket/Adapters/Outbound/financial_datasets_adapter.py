import logging
from typing import Any, Optional

import httpx

from StockMarket.Domain.endpoints import UpstreamRequest, available_tickers
from StockMarket.Domain.errors import ConfigurationError, UpstreamFetchError
from StockMarket.Ports.Outbound.financial_api_interface import FinancialDataAPI

DEFAULT_BASE_URL = "https://api.financialdatasets.ai"
DEFAULT_TIMEOUT = 10.0

_STATUS_MESSAGES = {
    401: "Invalid API key",
    403: "Access forbidden - endpoint may require a higher subscription tier",
    404: "Resource not found",
    429: "Rate limit exceeded",
}


class FinancialDatasetsClient(FinancialDataAPI):
    """HTTP client for the Financial Datasets API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError(
                "Financial Datasets API key is required. Use --api-key argument or set "
                "FINANCIAL_API_KEY environment variable."
            )
        self.base_url = base_url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"X-API-KEY": api_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def request(self, request: UpstreamRequest) -> Any:
        """
        Execute the request and return the decoded JSON body.

        Every failure is raised as UpstreamFetchError carrying the endpoint
        path and, for HTTP errors, the status code.
        """
        self.logger.debug("%s %s params=%s", request.method, request.path, request.params)
        try:
            response = await self.client.request(
                request.method,
                request.path,
                params=list(request.params) or None,
                json=request.body,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            code = e.response.status_code
            message = _STATUS_MESSAGES.get(code) or f"HTTP error {code}: {e.response.text}"
            self.logger.error("Upstream %s failed: %s", request.path, message)
            raise UpstreamFetchError(message, endpoint=request.path, status_code=code) from e
        except (httpx.HTTPError, ValueError) as e:
            self.logger.error("Upstream %s failed: %s", request.path, e)
            raise UpstreamFetchError(f"Request failed: {e}", endpoint=request.path) from e

    async def fetch(self, request: UpstreamRequest) -> Any:
        body = await self.request(request)
        if request.response_key is None:
            return body
        if not isinstance(body, dict):
            raise UpstreamFetchError(
                f"Unexpected response body for {request.path}: expected a JSON object",
                endpoint=request.path,
            )
        return body.get(request.response_key)

    async def test_connection(self) -> bool:
        """Cheap reachability check against the ticker list endpoint."""
        try:
            await self.request(available_tickers())
        except UpstreamFetchError as e:
            self.logger.warning("Financial Datasets API connection test failed: %s", e)
            return False
        self.logger.info("Financial Datasets API connection test succeeded")
        return True

    async def close(self) -> None:
        await self.client.aclose()
