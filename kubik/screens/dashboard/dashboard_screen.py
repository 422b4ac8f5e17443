"""Dashboard screen - pods table, followed pod log and debug panel."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from datetime import datetime, timezone

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.message import Message
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, RichLog

from kubik.models.state.app_settings import AppSettings
from kubik.models.state.session import DashboardSession
from kubik.screens.dashboard.config import (
    DASHBOARD_BODY_ID,
    DEBUG_LOG_ID,
    DEBUG_PANEL_TITLE,
    POD_LOG_ID,
    POD_TABLE_COLUMNS,
    PODS_PANEL_TITLE,
    PODS_TABLE_ID,
)
from kubik.screens.dashboard.presenter import (
    DashboardFailed,
    DashboardPresenter,
    PodLogLabelChanged,
    PodLogReceived,
    PodsChanged,
)
from kubik.utils.log_setup import DebugPanelHandler, attach_handler, detach_handler

logger = logging.getLogger(__name__)


class PodSelected(Message):
    """Message sent to the app when the user selects a pod row."""

    def __init__(self, pod_name: str) -> None:
        super().__init__()
        self.pod_name = pod_name


class DebugRecord(Message):
    """Message carrying one formatted log record for the debug panel."""

    def __init__(self, line: str) -> None:
        super().__init__()
        self.line = line


class DashboardScreen(Screen[None]):
    """Main dashboard for one namespace."""

    DEFAULT_CSS = """
    #dashboard-body {
        height: 1fr;
    }

    #pods-table {
        height: 1fr;
        border: round $primary;
    }

    #pod-log {
        height: 1fr;
        border: round $secondary;
    }

    #debug-log {
        height: 1fr;
        border: round $warning;
        display: none;
    }
    """

    def __init__(self, session: DashboardSession, settings: AppSettings) -> None:
        super().__init__()
        self.session = session
        self.settings = settings
        self.presenter = DashboardPresenter(self, log_buffer_length=settings.log_buffer_length)
        self._debug_handler = DebugPanelHandler(self._post_debug_record)

    def _post_debug_record(self, line: str) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # Records from worker threads are not shown
            return
        self.post_message(DebugRecord(line))

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id=DASHBOARD_BODY_ID):
            yield DataTable(id=PODS_TABLE_ID, cursor_type="row")
            yield RichLog(
                id=POD_LOG_ID,
                max_lines=self.settings.log_buffer_length,
                markup=False,
                highlight=False,
                wrap=True,
            )
            yield RichLog(
                id=DEBUG_LOG_ID,
                max_lines=self.settings.debug_buffer_length,
                markup=False,
                highlight=False,
                wrap=True,
            )
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(f"#{PODS_TABLE_ID}", DataTable)
        for label, width in POD_TABLE_COLUMNS:
            table.add_column(label, width=width, key=label.lower())
        table.border_title = PODS_PANEL_TITLE
        self.query_one(f"#{POD_LOG_ID}", RichLog).border_title = self.presenter.log_label(None)
        self.query_one(f"#{DEBUG_LOG_ID}", RichLog).border_title = DEBUG_PANEL_TITLE
        attach_handler(self._debug_handler)
        table.focus()

    def on_unmount(self) -> None:
        detach_handler(self._debug_handler)

    # =========================================================================
    # Rendering
    # =========================================================================

    def render_pods(self, now: datetime | None = None) -> None:
        """Redraw the pods table from the session snapshot, keeping the cursor."""
        try:
            table = self.query_one(f"#{PODS_TABLE_ID}", DataTable)
        except NoMatches:
            return
        cursor_row = table.cursor_row
        table.clear()
        current = now or datetime.now(timezone.utc)
        for key, row in self.presenter.rows(
            self.session.snapshot, self.session.selected_pod, current
        ):
            table.add_row(*row, key=key)
        if table.row_count:
            table.move_cursor(row=min(max(cursor_row, 0), table.row_count - 1))

    def set_log_label(self, markup: str) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{POD_LOG_ID}", RichLog).border_title = markup

    def show_selection(self, pod_name: str | None) -> None:
        """Reset the logs panel for a newly selected pod.

        The label stays plain until the log request succeeds.
        """
        self.presenter.reset_logs(pod_name)
        with suppress(NoMatches):
            self.query_one(f"#{POD_LOG_ID}", RichLog).clear()
        self.set_log_label(self.presenter.log_label(None))
        self.render_pods()

    def toggle_debug(self) -> None:
        with suppress(NoMatches):
            debug_log = self.query_one(f"#{DEBUG_LOG_ID}", RichLog)
            debug_log.display = not debug_log.display

    # =========================================================================
    # Message handlers
    # =========================================================================

    def on_pods_changed(self, message: PodsChanged) -> None:
        self.render_pods()

    def on_pod_log_received(self, message: PodLogReceived) -> None:
        if message.pod_name != self.presenter.log_pod:
            return
        with suppress(NoMatches):
            self.query_one(f"#{POD_LOG_ID}", RichLog).write(message.line)

    def on_pod_log_label_changed(self, message: PodLogLabelChanged) -> None:
        if message.pod_name != self.presenter.log_pod:
            return
        self.set_log_label(self.presenter.log_label(message.pod_name, message.state))

    def on_dashboard_failed(self, message: DashboardFailed) -> None:
        self.notify(message.error, title="Error", severity="error")

    def on_debug_record(self, message: DebugRecord) -> None:
        with suppress(NoMatches):
            self.query_one(f"#{DEBUG_LOG_ID}", RichLog).write(message.line)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        key = event.row_key.value
        if key is None:
            return
        index = self.session.snapshot.index_of(key)
        resource = (
            self.session.snapshot.items[index]
            if index >= 0
            else self.session.snapshot.find_by_name(key)
        )
        if resource is None:
            logger.debug("Selected row %s is no longer in the snapshot", key)
            return
        self.post_message(PodSelected(resource.name))
