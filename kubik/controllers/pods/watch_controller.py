"""Pod watch controller - keeps the session snapshot in sync with the server.

The controller lists the namespace's pods once, then follows a watch stream
from the list's resource version. Every applied event advances the
snapshot's version; when the stream ends for any reason other than an
explicit cancellation, the watch resumes at the last known version without
re-listing.

States: IDLE -> LISTING -> WATCHING -> (RECONNECTING -> WATCHING)*
"""

from __future__ import annotations

import asyncio
import logging

from kubik.constants.enums import WatchEventType, WatchState
from kubik.constants.timeouts import AGE_REFRESH_INTERVAL, WATCH_RECONNECT_DELAY
from kubik.constants.values import SCOPE_REFRESH, SCOPE_WATCH
from kubik.controllers.base.base_controller import BaseController
from kubik.controllers.base.errors import (
    KubikError,
    ProtocolError,
    WatchExpired,
)
from kubik.controllers.base.listener import DashboardListener
from kubik.controllers.cluster import requests
from kubik.controllers.cluster.client import ClusterClient
from kubik.controllers.pods.parsers.event_parser import WatchEventParser
from kubik.controllers.streaming.stream import StreamEnd
from kubik.models.core.resource import ResourceSnapshot, WatchEvent
from kubik.models.state.session import DashboardSession

logger = logging.getLogger(__name__)


class _WatchConsumer:
    """Applies the frames of one watch stream to the snapshot."""

    def __init__(self, controller: PodWatchController, namespace: str, generation: int) -> None:
        self._controller = controller
        self._namespace = namespace
        self._generation = generation
        self.expired = False

    async def on_frame(self, frame: bytes) -> None:
        if not frame.strip() or not self._controller._is_current(self._generation):
            return
        try:
            event = self._controller._parser.parse(frame)
        except WatchExpired as exc:
            logger.warning("Watch for namespace %s expired: %s", self._namespace, exc)
            self.expired = True
            return
        except ProtocolError as exc:
            logger.warning("Dropping watch frame for namespace %s: %s", self._namespace, exc)
            return
        await self._controller._apply(event)

    async def on_end(self, end: StreamEnd) -> None:
        if end.cancelled or not self._controller._is_current(self._generation):
            return
        self._controller._reconnect(self._namespace, self._generation, relist=self.expired)


class PodWatchController(BaseController):
    """Mirrors one namespace's pods into `session.snapshot`."""

    def __init__(
        self,
        client: ClusterClient,
        session: DashboardSession,
        listener: DashboardListener,
        *,
        refresh_interval: float = AGE_REFRESH_INTERVAL,
        relist_on_expired: bool = False,
        reconnect_delay: float = WATCH_RECONNECT_DELAY,
    ) -> None:
        """Initialize the controller.

        Args:
            client: Cluster client used for list and watch calls.
            session: Shared session holding the snapshot and scopes.
            listener: Presentation callbacks.
            refresh_interval: Seconds between age refresh ticks.
            relist_on_expired: Re-list when the server reports the watch
                version as expired instead of resuming the watch.
            reconnect_delay: Seconds to wait before resuming an ended watch.
        """
        super().__init__(client, session)
        self._listener = listener
        self._refresh_interval = refresh_interval
        self._relist_on_expired = relist_on_expired
        self._reconnect_delay = reconnect_delay
        self._parser = WatchEventParser()
        self._generation = 0
        self.state = WatchState.IDLE

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and self.state is not WatchState.IDLE

    async def start(self, namespace: str | None = None) -> ResourceSnapshot:
        """List the namespace's pods and start watching them.

        Returns once the watch stream is open; events keep flowing in the
        background until `stop()` or a namespace switch.

        Raises:
            ConnectionSetupError: If the list or the first watch request fails.
            AuthenticationFailed: If no usable credential could be obtained.
        """
        namespace = namespace or self._session.namespace
        self.stop()
        self._generation += 1
        generation = self._generation

        try:
            await self._list(namespace, generation)
            self._start_refresh_timer(generation)
            await self._watch(namespace, generation)
        except Exception:
            if generation == self._generation:
                self.stop()
            raise
        return self._session.snapshot

    def stop(self) -> None:
        """Cancel the watch stream, any pending reconnect and the refresh timer."""
        self._generation += 1
        self.state = WatchState.IDLE
        self._session.cancellations.run(SCOPE_WATCH)
        self._session.cancellations.run(SCOPE_REFRESH)

    async def _list(self, namespace: str, generation: int) -> None:
        self.state = WatchState.LISTING
        snapshot = await self._client.list_pods(namespace)
        if generation != self._generation:
            return
        self._session.snapshot.replace(snapshot)
        logger.debug(
            "Listed %d pod(s) in namespace %s at version %s",
            len(snapshot.items),
            namespace,
            snapshot.resource_version,
        )
        await self._notify(self._listener.on_snapshot_replaced, self._session.snapshot)

    async def _watch(self, namespace: str, generation: int) -> None:
        if generation != self._generation:
            return
        self.state = WatchState.WATCHING
        version = self._session.snapshot.resource_version
        handle = await self._client.open_stream(
            requests.watch_pods(namespace, version),
            _WatchConsumer(self, namespace, generation),
            on_handle=lambda started: self._track_stream(SCOPE_WATCH, started),
        )
        if not handle.cancel_requested:
            logger.info("Watching for pods changes in namespace %s ...", namespace)

    def _reconnect(self, namespace: str, generation: int, *, relist: bool) -> None:
        """Schedule the next watch after a stream ended on its own."""
        self.state = WatchState.RECONNECTING
        relist = relist and self._relist_on_expired
        version = self._session.snapshot.resource_version
        if relist:
            logger.info("Re-listing pods in namespace %s after expired watch", namespace)
        else:
            logger.info(
                "Watch for namespace %s ended, resuming at version %s", namespace, version
            )
        task = asyncio.create_task(
            self._resume(namespace, generation, relist=relist),
            name=f"watch-resume:{namespace}",
        )
        self._track_task(SCOPE_WATCH, task)

    async def _resume(self, namespace: str, generation: int, *, relist: bool) -> None:
        if self._reconnect_delay > 0:
            await asyncio.sleep(self._reconnect_delay)
        try:
            if relist:
                await self._list(namespace, generation)
            await self._watch(namespace, generation)
        except KubikError as exc:
            if generation != self._generation:
                return
            logger.error("Cannot resume watch for namespace %s: %s", namespace, exc)
            # stop() cancels this task too, so report first
            await self._notify(self._listener.on_error, exc)
            if generation == self._generation:
                self.stop()

    async def _apply(self, event: WatchEvent) -> None:
        """Apply one event to the snapshot and notify the listener."""
        change = self._session.snapshot.apply(event)
        if change is None:
            return
        if change.kind is WatchEventType.ADDED:
            await self._notify(self._listener.on_item_added, change.resource, change.index)
        elif change.kind is WatchEventType.MODIFIED:
            await self._notify(self._listener.on_item_modified, change.resource, change.index)
        else:
            was_selected = change.resource.name == self._session.selected_pod
            if was_selected:
                self._session.selected_pod = None
            await self._notify(
                self._listener.on_item_deleted, change.resource, change.index, was_selected
            )

    def _start_refresh_timer(self, generation: int) -> None:
        if generation != self._generation:
            return
        task = asyncio.create_task(
            self._refresh_loop(generation),
            name="watch-refresh",
        )
        self._track_task(SCOPE_REFRESH, task)

    async def _refresh_loop(self, generation: int) -> None:
        while generation == self._generation:
            await asyncio.sleep(self._refresh_interval)
            if generation != self._generation:
                return
            await self._notify(self._listener.on_refresh)
