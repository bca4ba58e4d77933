from abc import ABC, abstractmethod
from typing import Any

from StockMarket.Domain.generation_request import GenerationRequest


class SamplingTransport(ABC):
    """Delivers one generation request to the connected client and returns its raw reply."""

    @abstractmethod
    async def send_generation_request(self, request: GenerationRequest) -> Any:
        ...
