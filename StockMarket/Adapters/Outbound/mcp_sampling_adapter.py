"""
Sampling over the connected client's MCP session.

Sessions expose the send-and-wait operation under different names depending
on the SDK version in play, so the capability is probed once per session and
the chosen call is reused for every request on it.
"""

import logging
import weakref
from typing import Any, Awaitable, Callable, Optional

import mcp.types as mcp_types

from StockMarket.Domain.errors import TransportDispatchError
from StockMarket.Domain.generation_request import SAMPLING_METHOD, GenerationRequest
from StockMarket.Ports.Outbound.sampling_interface import SamplingTransport

CAPABILITIES = ("create_message", "send_request", "request")


def to_mcp_messages(request: GenerationRequest) -> list[mcp_types.SamplingMessage]:
    return [
        mcp_types.SamplingMessage(
            role=m.role,
            content=mcp_types.TextContent(type="text", text=m.content.text),
        )
        for m in request.messages
    ]


def to_mcp_preferences(request: GenerationRequest) -> mcp_types.ModelPreferences:
    prefs = request.model_preferences
    return mcp_types.ModelPreferences(
        hints=[mcp_types.ModelHint(name=h.name) for h in prefs.hints],
        intelligencePriority=prefs.intelligence_priority,
        speedPriority=prefs.speed_priority,
        costPriority=prefs.cost_priority,
    )


class MCPSessionSamplingAdapter(SamplingTransport):
    _by_session: "weakref.WeakKeyDictionary[Any, MCPSessionSamplingAdapter]" = weakref.WeakKeyDictionary()

    def __init__(self, session: Any, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.capability = self._probe(session)
        # weak, so the per-session cache entry dies with the session
        try:
            self._session_ref: Callable[[], Any] = weakref.ref(session)
        except TypeError:
            self._session_ref = lambda: session
        self._send: Callable[[GenerationRequest], Awaitable[Any]] = getattr(self, f"_via_{self.capability}")
        self.logger.debug("Sampling capability for %s: %s", type(session).__name__, self.capability)

    @classmethod
    def for_session(cls, session: Any, logger: Optional[logging.Logger] = None) -> "MCPSessionSamplingAdapter":
        """Adapter for ``session``, probed on first use and cached while the session lives."""
        try:
            return cls._by_session[session]
        except KeyError:
            pass
        except TypeError:
            # not weak-referenceable, nothing to cache against
            return cls(session, logger)
        adapter = cls(session, logger)
        cls._by_session[session] = adapter
        return adapter

    @property
    def session(self) -> Any:
        session = self._session_ref()
        if session is None:
            raise TransportDispatchError("Client session is closed")
        return session

    @staticmethod
    def _probe(session: Any) -> str:
        if session is None:
            raise TransportDispatchError("No client session is attached to this request")
        for name in CAPABILITIES:
            if callable(getattr(session, name, None)):
                return name
        raise TransportDispatchError("Connected client does not support sampling")

    # ---------- capability implementations ----------
    async def _via_create_message(self, request: GenerationRequest) -> Any:
        return await self.session.create_message(
            messages=to_mcp_messages(request),
            max_tokens=request.max_tokens,
            system_prompt=request.system_prompt,
            model_preferences=to_mcp_preferences(request),
        )

    async def _via_send_request(self, request: GenerationRequest) -> Any:
        wire = mcp_types.ServerRequest(
            mcp_types.CreateMessageRequest(
                method=SAMPLING_METHOD,
                params=mcp_types.CreateMessageRequestParams(
                    messages=to_mcp_messages(request),
                    systemPrompt=request.system_prompt,
                    modelPreferences=to_mcp_preferences(request),
                    maxTokens=request.max_tokens,
                ),
            )
        )
        return await self.session.send_request(wire, mcp_types.CreateMessageResult)

    async def _via_request(self, request: GenerationRequest) -> Any:
        return await self.session.request({"method": SAMPLING_METHOD, "params": request.to_params()})

    async def send_generation_request(self, request: GenerationRequest) -> Any:
        self.logger.debug("Sending %s via %s", SAMPLING_METHOD, self.capability)
        return await self._send(request)
