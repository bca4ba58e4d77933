"""
Sampling response resolver.

One round trip per call: dispatch the GenerationRequest through the
SamplingTransport, wait (optionally bounded), then normalise the reply into
text using the ordered shape cascade in ``reply_shapes``.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import anyio
from pydantic import BaseModel, ConfigDict

from StockMarket.Domain.errors import (
    ReplyShapeError,
    SamplingTimeoutError,
    TransportDispatchError,
)
from StockMarket.Domain.generation_request import SAMPLING_METHOD, GenerationRequest
from StockMarket.Domain.reply_shapes import match_reply
from StockMarket.Domain.sampling_state_enum import SamplingState
from StockMarket.Ports.Outbound.sampling_interface import SamplingTransport

logger = logging.getLogger(__name__)

# Lower-cased fragments of transport errors raised when the client's reply
# reached the server but could not be decoded into a result object.
MALFORMED_REPLY_SIGNATURES = (
    "validation error",
    "invalid_type",
    "expected object",
    "unexpected response",
    "invalid response",
)

FALLBACK_MESSAGE = (
    "AI analysis is temporarily unavailable: the connected client returned a "
    "sampling response that the server could not read, so the generated analysis "
    "could not be delivered. The financial data itself was retrieved successfully. "
    "Use the data tools (for example get_company_facts or get_financial_metrics_snapshot) "
    "to inspect it directly, or retry with a client that fully supports MCP sampling."
)


class SamplingOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    shape: str
    used_fallback: bool = False


class SamplingRound(BaseModel):
    """Per-invocation record of the resolver's state transitions."""

    method: str = SAMPLING_METHOD
    state: SamplingState = SamplingState.INIT
    trace: List[SamplingState] = [SamplingState.INIT]
    error: Optional[str] = None


def _advance(round_: SamplingRound, state: SamplingState) -> SamplingRound:
    round_.state = state
    round_.trace.append(state)
    return round_


def _fail(round_: SamplingRound, error: Exception | str) -> SamplingRound:
    round_.error = str(error)
    return _advance(round_, SamplingState.FAILED)


def is_malformed_reply_error(error: BaseException) -> bool:
    message = str(error).lower()
    return any(signature in message for signature in MALFORMED_REPLY_SIGNATURES)


class SamplingResponseResolver:
    def __init__(
        self,
        transport: SamplingTransport,
        timeout: float | None = None,
        logger: logging.Logger | None = None,
    ):
        self.transport = transport
        self.timeout = timeout or None
        self.logger = logger or logging.getLogger(__name__)
        self.last_round: SamplingRound | None = None

    async def _await_reply(self, request: GenerationRequest) -> Any:
        if self.timeout is None:
            return await self.transport.send_generation_request(request)
        try:
            with anyio.fail_after(self.timeout):
                return await self.transport.send_generation_request(request)
        except TimeoutError as e:
            raise SamplingTimeoutError(self.timeout) from e

    async def resolve(self, request: GenerationRequest) -> SamplingOutcome:
        """
        Run the round trip and return the extracted text.

        Raises TransportDispatchError (SamplingTimeoutError on an expired wait)
        when the call cannot be completed, and ReplyShapeError when the reply
        carries no text. A transport error matching a known malformed-reply
        signature yields FALLBACK_MESSAGE instead of raising.
        """
        round_ = self.last_round = SamplingRound()

        _advance(round_, SamplingState.DISPATCHING)
        self.logger.debug("Dispatching %s (max_tokens=%s)", round_.method, request.max_tokens)
        try:
            _advance(round_, SamplingState.AWAITING)
            reply = await self._await_reply(request)
        except SamplingTimeoutError as e:
            _fail(round_, e)
            self.logger.error("Sampling round timed out: %s", e)
            raise
        except Exception as e:
            _fail(round_, e)
            if is_malformed_reply_error(e):
                self.logger.warning("Sampling reply could not be decoded, using fallback text: %s", e)
                return SamplingOutcome(text=FALLBACK_MESSAGE, shape="fallback", used_fallback=True)
            self.logger.error("Sampling dispatch failed: %s", e)
            if isinstance(e, TransportDispatchError):
                raise
            raise TransportDispatchError(f"Sampling request failed: {e}") from e

        _advance(round_, SamplingState.NORMALIZING)
        match = match_reply(reply)
        if match is None:
            error = ReplyShapeError(type(reply).__name__)
            _fail(round_, error)
            self.logger.error("%s", error)
            raise error

        _advance(round_, SamplingState.DONE)
        self.logger.info("Sampling reply resolved (shape=%s, %d chars)", match.shape, len(match.text))
        return SamplingOutcome(text=match.text, shape=match.shape)
