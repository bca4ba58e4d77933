from abc import ABC, abstractmethod
from typing import Any

from StockMarket.Domain.endpoints import UpstreamRequest


class FinancialDataAPI(ABC):
    @abstractmethod
    async def fetch(self, request: UpstreamRequest) -> Any:
        """Execute the request and return the unwrapped response field."""
        ...

    @abstractmethod
    async def close(self) -> None:
        ...
