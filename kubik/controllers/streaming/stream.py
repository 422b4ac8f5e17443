"""Streaming requests: open-ended HTTP responses delivered frame by frame.

A StreamingRequest sends one request and hands every newline-delimited
frame of the response body to a consumer, in arrival order, followed by a
single end-of-stream notification. It knows nothing about watches or logs:
callers encode those parameters in the RequestSpec and decide on retries.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from kubik.constants.enums import StreamEndReason
from kubik.controllers.base.errors import ConnectionSetupError, error_for_status
from kubik.models.core.request import RequestSpec

logger = logging.getLogger(__name__)

_FRAME_DELIMITER = b"\n"


@dataclass(frozen=True)
class StreamEnd:
    """End-of-stream notification delivered once to the consumer."""

    reason: StreamEndReason
    error: BaseException | None = None

    @property
    def cancelled(self) -> bool:
        return self.reason is StreamEndReason.CANCELLED


class FrameConsumer(Protocol):
    """Receives the frames of one stream."""

    async def on_frame(self, frame: bytes) -> None:
        """Called once per received frame, in arrival order."""
        ...

    async def on_end(self, end: StreamEnd) -> None:
        """Called once after the last frame."""
        ...


class StreamHandle:
    """Handle on one in-flight streaming request.

    Attributes:
        completion: Task that finishes after the consumer processed the end
            of the stream, or fails with ConnectionSetupError when the
            request could not be established.
    """

    def __init__(self, label: str) -> None:
        self.label = label
        self.completion: asyncio.Task[None] | None = None
        self.frames_received = 0
        self._opened = asyncio.Event()
        self._cancel_requested = False
        self._running = False

    @property
    def cancel_requested(self) -> bool:
        return self._cancel_requested

    @property
    def is_open(self) -> bool:
        return self._opened.is_set()

    def cancel(self) -> None:
        """Abort the underlying connection. Later calls are no-ops."""
        if self._cancel_requested:
            return
        self._cancel_requested = True
        task = self.completion
        if task is not None and self._running and not task.done():
            task.cancel()
        logger.debug("Cancelled stream %s", self.label)

    async def wait_open(self) -> None:
        """Wait until the response headers were accepted.

        Raises:
            ConnectionSetupError: If the request failed before streaming began.
        """
        if self.completion is None:
            raise RuntimeError("Stream has not been started")
        opened = asyncio.ensure_future(self._opened.wait())
        try:
            await asyncio.wait(
                {opened, self.completion},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            if not opened.done():
                opened.cancel()
        if self._opened.is_set():
            return
        if not self.completion.cancelled():
            # Re-raises the setup error, if any
            self.completion.result()


class StreamingRequest:
    """Runs streaming requests on a shared httpx client."""

    def __init__(self, http: httpx.AsyncClient, *, connect_timeout: float = 10.0) -> None:
        self._http = http
        self._timeout = httpx.Timeout(connect_timeout, read=None)

    def start_stream(self, spec: RequestSpec, consumer: FrameConsumer) -> StreamHandle:
        """Start streaming `spec` into `consumer`.

        Must be called from a running event loop.

        Returns:
            StreamHandle whose `cancel` stops the stream.
        """
        handle = StreamHandle(spec.path)
        handle.completion = asyncio.create_task(
            self._run(spec, consumer, handle),
            name=f"stream:{spec.path}",
        )
        handle.completion.add_done_callback(_log_completion)
        return handle

    def _build_request(self, spec: RequestSpec) -> httpx.Request:
        return self._http.build_request(
            spec.method,
            spec.path,
            params=spec.params or None,
            headers=spec.headers or None,
            timeout=self._timeout,
        )

    async def _run(
        self,
        spec: RequestSpec,
        consumer: FrameConsumer,
        handle: StreamHandle,
    ) -> None:
        if handle.cancel_requested:
            await consumer.on_end(StreamEnd(StreamEndReason.CANCELLED))
            return
        handle._running = True
        response: httpx.Response | None = None
        try:
            try:
                response = await self._http.send(
                    self._build_request(spec),
                    stream=True,
                    auth=spec.httpx_auth(),
                    follow_redirects=spec.follow_redirects,
                )
            except httpx.HTTPError as exc:
                raise ConnectionSetupError(
                    f"{spec.method} {spec.path} failed: {exc}"
                ) from exc

            if not response.is_success:
                raise error_for_status(
                    response.status_code,
                    f"{spec.method} {spec.path} returned {response.status_code}",
                )

            handle._opened.set()
            logger.debug("Stream %s opened", spec.path)
            end = await self._pump(response, consumer, handle)
        except asyncio.CancelledError:
            if not handle.cancel_requested:
                raise
            end = StreamEnd(StreamEndReason.CANCELLED)
        finally:
            if response is not None:
                await _close_quietly(response)

        if handle.cancel_requested:
            end = StreamEnd(StreamEndReason.CANCELLED)
        logger.debug("Stream %s ended: %s", spec.path, end.reason.value)
        await consumer.on_end(end)

    async def _pump(
        self,
        response: httpx.Response,
        consumer: FrameConsumer,
        handle: StreamHandle,
    ) -> StreamEnd:
        """Split the body into frames and deliver them until the body ends."""
        buffer = bytearray()

        async def deliver(frame: bytes) -> None:
            handle.frames_received += 1
            await consumer.on_frame(frame)

        try:
            async for chunk in response.aiter_bytes():
                # Bytes held back from earlier chunks contain no delimiter
                scan_from = len(buffer)
                buffer += chunk
                start = 0
                while True:
                    index = buffer.find(_FRAME_DELIMITER, max(start, scan_from))
                    if index < 0:
                        break
                    await deliver(bytes(buffer[start:index]).rstrip(b"\r"))
                    start = index + 1
                if start:
                    del buffer[:start]
            if buffer:
                await deliver(bytes(buffer))
        except httpx.HTTPError as exc:
            # Servers abort timed-out chunked streams instead of ending them
            logger.debug("Stream %s interrupted: %s", response.request.url.path, exc)
            return StreamEnd(StreamEndReason.ERROR, exc)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception("Stream consumer failed for %s", response.request.url.path)
            return StreamEnd(StreamEndReason.ERROR, exc)
        return StreamEnd(StreamEndReason.CLOSED)


async def _close_quietly(response: httpx.Response) -> None:
    try:
        await asyncio.shield(response.aclose())
    except (httpx.HTTPError, asyncio.CancelledError):
        logger.debug("Ignoring error while closing %s", response.request.url.path)


def _log_completion(task: asyncio.Task[None]) -> None:
    """Retrieve the task outcome so unawaited failures are logged once."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Stream task %s failed: %s", task.get_name(), exc)


__all__ = [
    "FrameConsumer",
    "StreamEnd",
    "StreamHandle",
    "StreamingRequest",
]
