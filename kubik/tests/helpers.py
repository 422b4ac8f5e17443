"""Helpers shared by Kubik unit tests: payload builders, stream feeds, listeners."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Callable
from typing import Any

from kubik.constants.enums import LogLabelState
from kubik.controllers.base.listener import DashboardListener
from kubik.models.core.resource import Resource, ResourceSnapshot

SERVER = "https://cluster.test:8443"


def pod_payload(
    name: str,
    *,
    uid: str | None = None,
    phase: str = "Running",
    version: str = "1",
    start_time: str | None = "2024-01-01T00:00:00Z",
    deletion_timestamp: str | None = None,
    namespace: str = "default",
) -> dict[str, Any]:
    """Build a pod object the way the API server returns it."""
    metadata: dict[str, Any] = {
        "name": name,
        "namespace": namespace,
        "uid": uid or f"uid-{name}",
        "resourceVersion": version,
    }
    if deletion_timestamp:
        metadata["deletionTimestamp"] = deletion_timestamp
    status: dict[str, Any] = {"phase": phase}
    if start_time:
        status["startTime"] = start_time
    return {"kind": "Pod", "apiVersion": "v1", "metadata": metadata, "status": status}


def pod_list_payload(*pods: dict[str, Any], version: str = "100") -> dict[str, Any]:
    return {
        "kind": "PodList",
        "apiVersion": "v1",
        "metadata": {"resourceVersion": version},
        "items": list(pods),
    }


def watch_frame(event_type: str, pod: dict[str, Any]) -> bytes:
    return json.dumps({"type": event_type, "object": pod}).encode("utf-8") + b"\n"


class StreamFeed:
    """Controllable chunked response body.

    Chunks pushed into the feed are yielded in order; `close()` ends the
    body cleanly and `fail()` makes the body raise mid-stream.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue[bytes | BaseException | None] = asyncio.Queue()

    def push(self, *chunks: bytes) -> None:
        for chunk in chunks:
            self._queue.put_nowait(chunk)

    def close(self) -> None:
        self._queue.put_nowait(None)

    def fail(self, error: BaseException) -> None:
        self._queue.put_nowait(error)

    async def body(self) -> AsyncIterator[bytes]:
        while True:
            item = await self._queue.get()
            if item is None:
                return
            if isinstance(item, BaseException):
                raise item
            yield item


class RecordingListener(DashboardListener):
    """Listener that records every callback in order."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def named(self, name: str) -> list[tuple[Any, ...]]:
        return [event[1:] for event in self.events if event[0] == name]

    def on_snapshot_replaced(self, snapshot: ResourceSnapshot) -> None:
        self.events.append(("replaced", [item.name for item in snapshot.items]))

    def on_item_added(self, resource: Resource, index: int) -> None:
        self.events.append(("added", resource.name, index))

    def on_item_modified(self, resource: Resource, index: int) -> None:
        self.events.append(("modified", resource.name, index))

    def on_item_deleted(self, resource: Resource, index: int, was_selected: bool) -> None:
        self.events.append(("deleted", resource.name, index, was_selected))

    def on_refresh(self) -> None:
        self.events.append(("refresh",))

    def on_log_line(self, pod_name: str, message: str) -> None:
        self.events.append(("log", pod_name, message))

    def on_log_label(self, pod_name: str, state: LogLabelState) -> None:
        self.events.append(("label", pod_name, state))

    def on_error(self, error: Exception) -> None:
        self.events.append(("error", error))


async def wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Yield to the event loop until `predicate()` holds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(0.005)


async def settle(rounds: int = 5) -> None:
    """Let pending callbacks and cancelled tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0.005)
