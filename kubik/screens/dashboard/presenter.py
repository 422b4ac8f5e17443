"""Dashboard presenter - turns controller callbacks into screen messages and rows."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime
from typing import Any

from rich.markup import escape
from rich.text import Text
from textual.message import Message

from kubik.constants.enums import LogLabelState
from kubik.constants.values import LOG_BUFFER_LENGTH, LOGS_LABEL
from kubik.controllers.base.listener import DashboardListener
from kubik.models.core.resource import Resource, ResourceSnapshot
from kubik.screens.dashboard.config import (
    MARKER_STYLE,
    PHASE_STYLES,
    POD_NAME_STYLE,
    SELECTED_POD_STYLE,
)
from kubik.utils.duration import format_age

logger = logging.getLogger(__name__)


class PodsChanged(Message):
    """Message indicating the pods table must be redrawn."""

    def __init__(self, reason: str) -> None:
        super().__init__()
        self.reason = reason


class PodLogReceived(Message):
    """Message carrying one log line of the followed pod."""

    def __init__(self, pod_name: str, line: str) -> None:
        super().__init__()
        self.pod_name = pod_name
        self.line = line


class PodLogLabelChanged(Message):
    """Message indicating the logs panel label changed."""

    def __init__(self, pod_name: str, state: LogLabelState) -> None:
        super().__init__()
        self.pod_name = pod_name
        self.state = state


class DashboardFailed(Message):
    """Message indicating a background operation failed."""

    def __init__(self, error: str) -> None:
        super().__init__()
        self.error = error


class DashboardPresenter(DashboardListener):
    """Presenter for DashboardScreen data and row formatting."""

    def __init__(self, screen: Any, *, log_buffer_length: int = LOG_BUFFER_LENGTH) -> None:
        self._screen = screen
        self._log_lines: deque[str] = deque(maxlen=log_buffer_length)
        self._log_pod: str | None = None

    @property
    def log_lines(self) -> list[str]:
        return list(self._log_lines)

    @property
    def log_pod(self) -> str | None:
        return self._log_pod

    def reset_logs(self, pod_name: str | None = None) -> None:
        self._log_lines.clear()
        self._log_pod = pod_name

    def _post(self, message: Message) -> None:
        self._screen.post_message(message)

    # =========================================================================
    # Listener callbacks
    # =========================================================================

    def on_snapshot_replaced(self, snapshot: ResourceSnapshot) -> None:
        self._post(PodsChanged("replaced"))

    def on_item_added(self, resource: Resource, index: int) -> None:
        self._post(PodsChanged("added"))

    def on_item_modified(self, resource: Resource, index: int) -> None:
        self._post(PodsChanged("modified"))

    def on_item_deleted(self, resource: Resource, index: int, was_selected: bool) -> None:
        self._post(PodsChanged("deleted"))
        if was_selected:
            self._post(PodLogLabelChanged(resource.name, LogLabelState.DELETED))

    def on_refresh(self) -> None:
        self._post(PodsChanged("refresh"))

    def on_log_line(self, pod_name: str, message: str) -> None:
        if pod_name != self._log_pod:
            logger.debug("Dropping log line of unselected pod %s", pod_name)
            return
        self._log_lines.append(message)
        self._post(PodLogReceived(pod_name, message))

    def on_log_label(self, pod_name: str, state: LogLabelState) -> None:
        self._post(PodLogLabelChanged(pod_name, state))

    def on_error(self, error: Exception) -> None:
        self._post(DashboardFailed(self.friendly_error(error)))

    # =========================================================================
    # Formatting
    # =========================================================================

    @staticmethod
    def friendly_error(error: BaseException) -> str:
        msg = str(error)
        if "timed out" in msg.lower() or "timeout" in msg.lower():
            return "Connection timed out"
        if "connection refused" in msg.lower():
            return "Connection refused"
        if len(msg) > 120:
            return msg[:117] + "..."
        return msg or type(error).__name__

    @staticmethod
    def format_row(
        resource: Resource,
        *,
        selected: bool = False,
        now: datetime | None = None,
    ) -> tuple[Text, Text, str]:
        """Format one pod as a (NAME, STATUS, AGE) table row."""
        name = Text(resource.name, style=SELECTED_POD_STYLE if selected else "")
        status = Text(resource.phase, style=PHASE_STYLES.get(resource.phase, ""))
        return name, status, format_age(resource.status.start_time, now)

    def rows(
        self,
        snapshot: ResourceSnapshot,
        selected: str | None,
        now: datetime | None = None,
    ) -> list[tuple[str, tuple[Text, Text, str]]]:
        """Return (row key, row) pairs in snapshot order."""
        return [
            (
                resource.uid or resource.name,
                self.format_row(resource, selected=resource.name == selected, now=now),
            )
            for resource in snapshot.items
        ]

    @staticmethod
    def log_label(pod_name: str | None, state: LogLabelState = LogLabelState.NONE) -> str:
        """Return the logs panel title as Rich markup."""
        if not pod_name:
            return LOGS_LABEL
        label = f"{LOGS_LABEL} [{POD_NAME_STYLE}]{escape(f'[{pod_name}]')}[/]"
        if state is not LogLabelState.NONE:
            label += f" [{MARKER_STYLE}]{state.value}[/]"
        return label
