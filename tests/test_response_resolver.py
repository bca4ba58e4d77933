import asyncio
import logging

import anyio
import pytest

from StockMarket.Domain.errors import (
    ReplyShapeError,
    SamplingTimeoutError,
    TransportDispatchError,
)
from StockMarket.Domain.generation_request import GenerationRequest, SamplingMessage
from StockMarket.Domain.response_resolver import (
    FALLBACK_MESSAGE,
    SamplingResponseResolver,
    is_malformed_reply_error,
)
from StockMarket.Domain.sampling_state_enum import SamplingState
from StockMarket.Ports.Outbound.sampling_interface import SamplingTransport


def _request() -> GenerationRequest:
    return GenerationRequest(messages=(SamplingMessage.user_text("Analyse AAPL"),))


class SlowTransport(SamplingTransport):
    async def send_generation_request(self, request):
        await anyio.sleep(5)
        return {"text": "too late"}


class TestResolve:
    def test_success_walks_the_linear_state_machine(self, stub_transport_cls):
        transport = stub_transport_cls(reply={"content": {"type": "text", "text": "Done."}})
        resolver = SamplingResponseResolver(transport)

        outcome = asyncio.run(resolver.resolve(_request()))

        assert outcome.text == "Done."
        assert outcome.shape == "canonical"
        assert outcome.used_fallback is False
        assert resolver.last_round.trace == [
            SamplingState.INIT,
            SamplingState.DISPATCHING,
            SamplingState.AWAITING,
            SamplingState.NORMALIZING,
            SamplingState.DONE,
        ]

    def test_request_is_sent_exactly_once(self, stub_transport_cls):
        transport = stub_transport_cls(reply="ok")
        request = _request()
        asyncio.run(SamplingResponseResolver(transport).resolve(request))
        assert transport.sent == [request]

    def test_reply_without_text_raises_reply_shape_error(self, stub_transport_cls):
        transport = stub_transport_cls(reply={"content": {"type": "image", "data": "AAAA"}})
        resolver = SamplingResponseResolver(transport)

        with pytest.raises(ReplyShapeError, match="reply type: dict"):
            asyncio.run(resolver.resolve(_request()))
        assert resolver.last_round.state is SamplingState.FAILED
        assert SamplingState.NORMALIZING in resolver.last_round.trace

    def test_malformed_reply_error_becomes_fallback_text(self, stub_transport_cls):
        error = ValueError("1 validation error for CreateMessageResult\ncontent\n  Field required")
        resolver = SamplingResponseResolver(stub_transport_cls(error=error))

        first = asyncio.run(resolver.resolve(_request()))
        second = asyncio.run(resolver.resolve(_request()))

        assert first.text == FALLBACK_MESSAGE
        assert first.used_fallback is True
        assert first == second
        assert resolver.last_round.state is SamplingState.FAILED

    def test_other_transport_errors_are_raised(self, stub_transport_cls):
        resolver = SamplingResponseResolver(stub_transport_cls(error=ConnectionError("pipe closed")))

        with pytest.raises(TransportDispatchError, match="pipe closed") as info:
            asyncio.run(resolver.resolve(_request()))
        assert isinstance(info.value.__cause__, ConnectionError)
        assert SamplingState.NORMALIZING not in resolver.last_round.trace

    def test_dispatch_errors_pass_through_unchanged(self, stub_transport_cls):
        error = TransportDispatchError("Connected client does not support sampling")
        resolver = SamplingResponseResolver(stub_transport_cls(error=error))

        with pytest.raises(TransportDispatchError) as info:
            asyncio.run(resolver.resolve(_request()))
        assert info.value is error

    def test_wait_is_bounded_by_timeout(self):
        resolver = SamplingResponseResolver(SlowTransport(), timeout=0.05)

        with pytest.raises(SamplingTimeoutError):
            asyncio.run(resolver.resolve(_request()))
        assert resolver.last_round.state is SamplingState.FAILED

    def test_zero_timeout_means_unbounded(self, stub_transport_cls):
        resolver = SamplingResponseResolver(stub_transport_cls(reply="ok"), timeout=0)
        assert resolver.timeout is None
        assert asyncio.run(resolver.resolve(_request())).text == "ok"

    def test_uses_injected_logger(self, stub_transport_cls, caplog):
        log = logging.getLogger("tests.resolver")
        resolver = SamplingResponseResolver(stub_transport_cls(reply="ok"), logger=log)
        with caplog.at_level(logging.INFO, logger="tests.resolver"):
            asyncio.run(resolver.resolve(_request()))
        assert any(r.name == "tests.resolver" and "bare_string" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Invalid_type: expected object, received string", True),
        ("Unexpected response from client", True),
        ("2 validation errors for CreateMessageResult", True),
        ("Connection reset by peer", False),
        ("Client does not support sampling", False),
    ],
)
def test_malformed_reply_signatures(message, expected):
    assert is_malformed_reply_error(RuntimeError(message)) is expected
