"""Tests for StreamingRequest."""

from __future__ import annotations

import httpx
import pytest

from kubik.constants.enums import StreamEndReason
from kubik.controllers.base.errors import ConnectionSetupError, NotFound
from kubik.controllers.streaming.stream import StreamEnd, StreamingRequest
from kubik.models.core.request import RequestSpec
from kubik.tests.helpers import SERVER, StreamFeed, settle, wait_for


class RecordingConsumer:
    def __init__(self) -> None:
        self.frames: list[bytes] = []
        self.ends: list[StreamEnd] = []

    async def on_frame(self, frame: bytes) -> None:
        self.frames.append(frame)

    async def on_end(self, end: StreamEnd) -> None:
        self.ends.append(end)


def _http(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=SERVER, transport=httpx.MockTransport(handler))


class TestStreamingRequest:
    """Tests for StreamingRequest.start_stream."""

    @pytest.mark.asyncio
    async def test_frames_are_delivered_in_order(self) -> None:
        feed = StreamFeed()
        http = _http(lambda request: httpx.Response(200, content=feed.body()))
        consumer = RecordingConsumer()

        handle = StreamingRequest(http).start_stream(RequestSpec(path="/stream"), consumer)
        await handle.wait_open()
        feed.push(b"one\ntw", b"o\r\nthr", b"ee\n", b"tail")
        feed.close()
        await handle.completion

        assert consumer.frames == [b"one", b"two", b"three", b"tail"]
        assert [end.reason for end in consumer.ends] == [StreamEndReason.CLOSED]
        assert handle.frames_received == 4
        await http.aclose()

    @pytest.mark.asyncio
    async def test_long_frame_split_over_many_chunks(self) -> None:
        feed = StreamFeed()
        http = _http(lambda request: httpx.Response(200, content=feed.body()))
        consumer = RecordingConsumer()

        handle = StreamingRequest(http).start_stream(RequestSpec(path="/stream"), consumer)
        await handle.wait_open()
        feed.push(*([b"x" * 50] * 2000))
        feed.push(b"\nab", b"c\nd\ne", b"\n")
        feed.close()
        await handle.completion

        assert consumer.frames == [b"x" * 100_000, b"abc", b"d", b"e"]
        assert handle.frames_received == 4
        await http.aclose()

    @pytest.mark.asyncio
    async def test_request_carries_spec_params(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"")

        http = _http(handler)
        consumer = RecordingConsumer()
        spec = RequestSpec(path="/api/v1/namespaces/default/pods", params={"watch": "true"})

        handle = StreamingRequest(http).start_stream(spec, consumer)
        await handle.completion

        assert seen[0].url.path == "/api/v1/namespaces/default/pods"
        assert seen[0].url.params["watch"] == "true"
        assert consumer.frames == []
        assert consumer.ends[0].reason is StreamEndReason.CLOSED
        await http.aclose()

    @pytest.mark.asyncio
    async def test_cancel_ends_with_cancelled_and_stops_frames(self) -> None:
        feed = StreamFeed()
        http = _http(lambda request: httpx.Response(200, content=feed.body()))
        consumer = RecordingConsumer()

        handle = StreamingRequest(http).start_stream(RequestSpec(path="/stream"), consumer)
        await handle.wait_open()
        feed.push(b"first\n")
        await wait_for(lambda: consumer.frames == [b"first"])

        handle.cancel()
        handle.cancel()
        feed.push(b"second\n")
        await handle.completion
        await settle()

        assert consumer.frames == [b"first"]
        assert len(consumer.ends) == 1
        assert consumer.ends[0].cancelled
        await http.aclose()

    @pytest.mark.asyncio
    async def test_cancel_before_start(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, content=b"never\n")

        http = _http(handler)
        consumer = RecordingConsumer()

        handle = StreamingRequest(http).start_stream(RequestSpec(path="/stream"), consumer)
        handle.cancel()
        await handle.completion

        assert calls == []
        assert consumer.frames == []
        assert consumer.ends[0].cancelled
        await http.aclose()

    @pytest.mark.asyncio
    async def test_setup_failure_rejects_without_consumer_calls(self) -> None:
        http = _http(lambda request: httpx.Response(500, json={"message": "boom"}))
        consumer = RecordingConsumer()

        handle = StreamingRequest(http).start_stream(RequestSpec(path="/stream"), consumer)
        with pytest.raises(ConnectionSetupError) as excinfo:
            await handle.wait_open()

        assert excinfo.value.status_code == 500
        assert consumer.frames == []
        assert consumer.ends == []
        await http.aclose()

    @pytest.mark.asyncio
    async def test_not_found_maps_to_not_found(self) -> None:
        http = _http(lambda request: httpx.Response(404))
        handle = StreamingRequest(http).start_stream(
            RequestSpec(path="/missing"), RecordingConsumer()
        )
        with pytest.raises(NotFound):
            await handle.wait_open()
        await http.aclose()

    @pytest.mark.asyncio
    async def test_transport_failure_rejects(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        http = _http(handler)
        consumer = RecordingConsumer()

        handle = StreamingRequest(http).start_stream(RequestSpec(path="/stream"), consumer)
        with pytest.raises(ConnectionSetupError, match="connection refused"):
            await handle.wait_open()
        assert consumer.ends == []
        await http.aclose()

    @pytest.mark.asyncio
    async def test_mid_stream_failure_ends_with_error(self) -> None:
        feed = StreamFeed()
        http = _http(lambda request: httpx.Response(200, content=feed.body()))
        consumer = RecordingConsumer()

        handle = StreamingRequest(http).start_stream(RequestSpec(path="/stream"), consumer)
        await handle.wait_open()
        feed.push(b"ok\n")
        feed.fail(httpx.ReadError("connection reset"))
        await handle.completion

        assert consumer.frames == [b"ok"]
        assert len(consumer.ends) == 1
        assert consumer.ends[0].reason is StreamEndReason.ERROR
        assert isinstance(consumer.ends[0].error, httpx.ReadError)
        await http.aclose()
