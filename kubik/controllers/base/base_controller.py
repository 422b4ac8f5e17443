"""Base controller for the namespace watch and log follow controllers.

Controllers own background streams registered under cancellation scopes of
the shared DashboardSession, so that a context change cancels exactly the
operations it invalidates.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from kubik.controllers.cluster.client import ClusterClient
    from kubik.controllers.streaming.stream import StreamHandle
    from kubik.models.state.session import DashboardSession

logger = logging.getLogger(__name__)


class BaseController(ABC):
    """Base controller class bound to a client and a session.

    Subclasses implement `start()`/`stop()` for their stream lifecycle.
    """

    def __init__(self, client: ClusterClient, session: DashboardSession) -> None:
        self._client = client
        self._session = session

    @property
    def session(self) -> DashboardSession:
        return self._session

    @abstractmethod
    async def start(self, *args: Any) -> Any:
        """Start the controller's background stream."""
        ...

    @abstractmethod
    def stop(self) -> None:
        """Cancel the controller's background stream."""
        ...

    def _track_stream(self, scope: str, handle: StreamHandle) -> None:
        """Register a stream under a scope until it completes."""
        registry = self._session.cancellations
        registry.add(scope, handle.cancel)
        if handle.completion is not None:
            handle.completion.add_done_callback(
                lambda _task: registry.discard(scope, handle.cancel)
            )

    def _track_task(self, scope: str, task: asyncio.Task[Any]) -> None:
        """Register a background task under a scope until it finishes."""
        registry = self._session.cancellations
        registry.add(scope, task.cancel)
        task.add_done_callback(lambda done: self._forget_task(scope, done))

    def _forget_task(self, scope: str, task: asyncio.Task[Any]) -> None:
        self._session.cancellations.discard(scope, task.cancel)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background task %s failed: %s", task.get_name(), exc)

    @staticmethod
    async def _notify(callback: Callable[..., Any] | None, *args: Any) -> None:
        """Invoke a listener callback, awaiting it when it is a coroutine.

        Listener failures are logged and never break the stream consumer.
        """
        if callback is None:
            return
        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Listener callback %r failed", callback)
