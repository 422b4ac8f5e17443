"""Unit tests for DashboardPresenter - message posting and row formatting.

This module tests:
- Listener callbacks posting screen messages
- Bounded log buffer and dropping lines of unselected pods
- format_row() / rows() column output
- log_label() markup
- friendly_error() message shortening
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

from kubik.constants.enums import LogLabelState
from kubik.models.core.resource import Resource, ResourceSnapshot
from kubik.screens.dashboard.presenter import (
    DashboardFailed,
    DashboardPresenter,
    PodLogLabelChanged,
    PodLogReceived,
    PodsChanged,
)
from kubik.tests.helpers import pod_payload

NOW = datetime(2024, 1, 1, 1, 2, 3, tzinfo=timezone.utc)

# =============================================================================
# Test Helpers
# =============================================================================


def _make_pod(name: str = "web-1", **kwargs) -> Resource:
    return Resource.model_validate(pod_payload(name, **kwargs))


def _posted(screen: MagicMock) -> list:
    return [call.args[0] for call in screen.post_message.call_args_list]


# =============================================================================
# Listener callbacks
# =============================================================================


class TestDashboardPresenterMessages:
    """Tests for messages posted by listener callbacks."""

    def test_snapshot_and_item_changes_redraw_pods(self) -> None:
        screen = MagicMock()
        presenter = DashboardPresenter(screen)
        pod = _make_pod()

        presenter.on_snapshot_replaced(ResourceSnapshot(items=[pod]))
        presenter.on_item_added(pod, 0)
        presenter.on_item_modified(pod, 0)
        presenter.on_refresh()

        messages = _posted(screen)
        assert all(isinstance(message, PodsChanged) for message in messages)
        assert [message.reason for message in messages] == [
            "replaced",
            "added",
            "modified",
            "refresh",
        ]

    def test_deleting_selected_pod_marks_label(self) -> None:
        screen = MagicMock()
        presenter = DashboardPresenter(screen)

        presenter.on_item_deleted(_make_pod(), 0, True)

        redraw, label = _posted(screen)
        assert isinstance(redraw, PodsChanged)
        assert isinstance(label, PodLogLabelChanged)
        assert label.pod_name == "web-1"
        assert label.state is LogLabelState.DELETED

    def test_deleting_other_pod_only_redraws(self) -> None:
        screen = MagicMock()
        presenter = DashboardPresenter(screen)

        presenter.on_item_deleted(_make_pod(), 0, False)

        assert len(_posted(screen)) == 1

    def test_log_lines_of_followed_pod_are_buffered(self) -> None:
        screen = MagicMock()
        presenter = DashboardPresenter(screen, log_buffer_length=2)
        presenter.reset_logs("web-1")

        for line in ("one", "two", "three"):
            presenter.on_log_line("web-1", line)

        assert presenter.log_lines == ["two", "three"]
        messages = _posted(screen)
        assert all(isinstance(message, PodLogReceived) for message in messages)
        assert messages[-1].line == "three"

    def test_log_lines_of_other_pod_are_dropped(self) -> None:
        screen = MagicMock()
        presenter = DashboardPresenter(screen)
        presenter.reset_logs("web-1")

        presenter.on_log_line("web-2", "stale")

        assert presenter.log_lines == []
        screen.post_message.assert_not_called()

    def test_reset_logs_clears_buffer(self) -> None:
        presenter = DashboardPresenter(MagicMock())
        presenter.reset_logs("web-1")
        presenter.on_log_line("web-1", "hello")

        presenter.reset_logs("web-2")

        assert presenter.log_lines == []
        assert presenter.log_pod == "web-2"

    def test_error_posts_friendly_message(self) -> None:
        screen = MagicMock()
        presenter = DashboardPresenter(screen)

        presenter.on_error(RuntimeError("Read timed out"))

        (message,) = _posted(screen)
        assert isinstance(message, DashboardFailed)
        assert message.error == "Connection timed out"


# =============================================================================
# Formatting
# =============================================================================


class TestDashboardPresenterFormatting:
    """Tests for row and label formatting."""

    def test_format_row_columns(self) -> None:
        pod = _make_pod(phase="Pending", start_time="2024-01-01T00:00:00Z")

        name, status, age = DashboardPresenter.format_row(pod, now=NOW)

        assert name.plain == "web-1"
        assert str(name.style) == ""
        assert status.plain == "Pending"
        assert str(status.style) == "yellow"
        assert age == "1h 2m"

    def test_format_row_highlights_selection(self) -> None:
        name, _status, _age = DashboardPresenter.format_row(
            _make_pod(), selected=True, now=NOW
        )

        assert str(name.style) == "bold blue"

    def test_format_row_pod_not_started(self) -> None:
        pod = _make_pod(phase="Pending", start_time=None)

        _name, _status, age = DashboardPresenter.format_row(pod, now=NOW)

        assert age == ""

    def test_unknown_phase_has_no_style(self) -> None:
        _name, status, _age = DashboardPresenter.format_row(
            _make_pod(phase="Evicted"), now=NOW
        )

        assert str(status.style) == ""

    def test_rows_follow_snapshot_order(self) -> None:
        presenter = DashboardPresenter(MagicMock())
        snapshot = ResourceSnapshot(items=[_make_pod("b"), _make_pod("a")])

        rows = presenter.rows(snapshot, "a", now=NOW)

        assert [key for key, _row in rows] == ["uid-b", "uid-a"]
        assert str(rows[1][1][0].style) == "bold blue"

    def test_log_label_without_pod(self) -> None:
        assert DashboardPresenter.log_label(None) == "Logs"

    def test_log_label_with_pod(self) -> None:
        assert DashboardPresenter.log_label("web-1") == r"Logs [grey50]\[web-1][/]"

    def test_log_label_with_marker(self) -> None:
        label = DashboardPresenter.log_label("web-1", LogLabelState.TERMINATING)

        assert label == r"Logs [grey50]\[web-1][/] [red]TERMINATING[/]"

    def test_friendly_error_truncates_long_messages(self) -> None:
        message = DashboardPresenter.friendly_error(RuntimeError("x" * 200))

        assert len(message) == 120
        assert message.endswith("...")

    def test_friendly_error_empty_message_uses_type(self) -> None:
        assert DashboardPresenter.friendly_error(ValueError()) == "ValueError"
