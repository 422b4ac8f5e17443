"""Log follower - tails the log of the selected pod across disconnects.

Servers end log streams on their own (request timeouts, node restarts).
After each disconnect the follower waits a fixed delay, checks the pod and
reconnects from the last delivered timestamp. Since `sinceTime` has
whole-second granularity, lines sharing the resume second are replayed;
those already delivered are suppressed.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque

from kubik.constants.enums import LogLabelState
from kubik.constants.timeouts import LOG_RECONNECT_DELAY
from kubik.constants.values import (
    LOG_BUFFER_LENGTH,
    LOG_TAIL_LINES,
    POD_PHASE_RUNNING,
    SCOPE_LOGS,
)
from kubik.controllers.base.base_controller import BaseController
from kubik.controllers.base.errors import KubikError, NotFound
from kubik.controllers.base.listener import DashboardListener
from kubik.controllers.cluster import requests
from kubik.controllers.cluster.client import ClusterClient
from kubik.controllers.logs.parsers.log_parser import (
    LogLine,
    parse_log_frame,
    since_time,
    truncate_to_seconds,
)
from kubik.controllers.streaming.stream import StreamEnd
from kubik.models.state.session import DashboardSession

logger = logging.getLogger(__name__)


class FollowSession:
    """State of following one pod's log.

    Attributes:
        checkpoint: Timestamp of the last delivered line, if any.
        stopped: Set once the follow was cancelled; nothing is delivered
            or reconnected afterwards.
    """

    def __init__(self, namespace: str, name: str, window: int) -> None:
        self.namespace = namespace
        self.name = name
        self.checkpoint: str | None = None
        self.stopped = False
        self.reconnects = 0
        self._delivered: deque[str] = deque(maxlen=window)

    def stop(self) -> None:
        self.stopped = True

    def seen(self, message: str) -> bool:
        """Whether `message` is among the recently delivered lines."""
        return message in self._delivered

    def record(self, line: LogLine) -> None:
        self._delivered.append(line.message)
        if since_time(line.timestamp):
            self.checkpoint = line.timestamp


class _LogConsumer:
    """Delivers the lines of one log stream of a follow session."""

    def __init__(self, follower: LogFollower, follow: FollowSession, prefix: str | None) -> None:
        self._follower = follower
        self._follow = follow
        self._prefix = prefix

    def is_replayed(self, line: LogLine) -> bool:
        return bool(
            self._prefix
            and line.timestamp.startswith(self._prefix)
            and self._follow.seen(line.message)
        )

    async def on_frame(self, frame: bytes) -> None:
        if self._follow.stopped:
            return
        line = parse_log_frame(frame)
        if line is None or self.is_replayed(line):
            return
        self._follow.record(line)
        await self._follower._notify(
            self._follower._listener.on_log_line, self._follow.name, line.message
        )

    async def on_end(self, end: StreamEnd) -> None:
        if end.cancelled or self._follow.stopped:
            return
        logger.debug("Log stream for pod %s ended (%s)", self._follow.name, end.reason.value)
        self._follower._schedule_reconnect(self._follow)


class LogFollower(BaseController):
    """Follows the log of one pod at a time under the `watch.logs` scope."""

    def __init__(
        self,
        client: ClusterClient,
        session: DashboardSession,
        listener: DashboardListener,
        *,
        tail_lines: int = LOG_TAIL_LINES,
        reconnect_delay: float = LOG_RECONNECT_DELAY,
        dedup_window: int = LOG_BUFFER_LENGTH,
    ) -> None:
        super().__init__(client, session)
        self._listener = listener
        self._tail_lines = tail_lines
        self._reconnect_delay = reconnect_delay
        self._dedup_window = dedup_window
        self.current: FollowSession | None = None

    async def start(self, name: str, namespace: str | None = None) -> FollowSession:
        """Follow the log of pod `name`, replacing any previous follow.

        Raises:
            ConnectionSetupError: If the first log request fails.
            AuthenticationFailed: If no usable credential could be obtained.
        """
        self.stop()
        follow = FollowSession(namespace or self._session.namespace, name, self._dedup_window)
        self.current = follow
        self._session.cancellations.add(SCOPE_LOGS, follow.stop)
        await self._open(follow)
        if not follow.stopped:
            logger.info("Following log for pod %s ...", name)
            await self._notify(self._listener.on_log_label, name, LogLabelState.NONE)
        return follow

    def stop(self) -> None:
        """Cancel the current log stream and any pending reconnect."""
        self._session.cancellations.run(SCOPE_LOGS)

    async def _open(self, follow: FollowSession) -> None:
        since = since_time(follow.checkpoint) if follow.checkpoint else None
        prefix = truncate_to_seconds(follow.checkpoint) if since else None
        await self._client.open_stream(
            requests.follow_log(follow.namespace, follow.name, self._tail_lines, since),
            _LogConsumer(self, follow, prefix),
            on_handle=lambda handle: self._track_stream(SCOPE_LOGS, handle),
        )

    def _schedule_reconnect(self, follow: FollowSession) -> None:
        task = asyncio.create_task(
            self._reconnect(follow),
            name=f"log-reconnect:{follow.name}",
        )
        self._track_task(SCOPE_LOGS, task)

    async def _reconnect(self, follow: FollowSession) -> None:
        await asyncio.sleep(self._reconnect_delay)
        if follow.stopped:
            return
        try:
            pod = await self._client.get_pod(follow.namespace, follow.name)
            if follow.stopped:
                return
            if pod.phase != POD_PHASE_RUNNING:
                logger.debug("Pod %s is %s, log follow ends", follow.name, pod.phase)
                return
            if pod.is_terminating:
                await self._notify(
                    self._listener.on_log_label, follow.name, LogLabelState.TERMINATING
                )
                return
            follow.reconnects += 1
            await self._open(follow)
        except NotFound:
            logger.debug("Pod %s no longer exists, log follow ends", follow.name)
            return
        except KubikError as exc:
            if follow.stopped:
                return
            logger.error("Cannot resume log of pod %s: %s", follow.name, exc)
            await self._notify(self._listener.on_error, exc)
            return
        if not follow.stopped:
            logger.info("Following log for pod %s ...", follow.name)
