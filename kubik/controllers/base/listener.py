"""Callbacks the dashboard core exposes to the presentation layer."""

from __future__ import annotations

from kubik.constants.enums import LogLabelState
from kubik.models.core.resource import Resource, ResourceSnapshot


class DashboardListener:
    """No-op base for presentation callbacks.

    Subclasses override what they render. Every method may also be a
    coroutine function; controllers await the result when needed.
    """

    def on_snapshot_replaced(self, snapshot: ResourceSnapshot) -> None:
        """The whole pod list was (re)loaded."""

    def on_item_added(self, resource: Resource, index: int) -> None:
        """A pod was appended at `index`."""

    def on_item_modified(self, resource: Resource, index: int) -> None:
        """The pod at `index` was replaced in place."""

    def on_item_deleted(self, resource: Resource, index: int, was_selected: bool) -> None:
        """The pod formerly at `index` was removed."""

    def on_refresh(self) -> None:
        """Periodic tick to recompute derived fields such as ages."""

    def on_log_line(self, pod_name: str, message: str) -> None:
        """A new log line of the followed pod."""

    def on_log_label(self, pod_name: str, state: LogLabelState) -> None:
        """The followed pod's log label changed."""

    def on_error(self, error: Exception) -> None:
        """A failure the core cannot recover from locally."""
