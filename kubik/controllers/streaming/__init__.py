"""Streaming request primitives."""

from kubik.controllers.streaming.stream import (
    FrameConsumer,
    StreamEnd,
    StreamHandle,
    StreamingRequest,
)

__all__ = [
    "FrameConsumer",
    "StreamEnd",
    "StreamHandle",
    "StreamingRequest",
]
