"""Utility functions and classes for the Kubik dashboard."""

from kubik.utils.cancellations import CancellationHandle, CancellationRegistry
from kubik.utils.duration import format_age, format_duration, parse_timestamp
from kubik.utils.log_setup import (
    DebugPanelHandler,
    attach_handler,
    configure_logging,
    detach_handler,
)

__all__ = [
    # Cancellation
    "CancellationHandle",
    "CancellationRegistry",
    # Logging
    "DebugPanelHandler",
    "attach_handler",
    "configure_logging",
    "detach_handler",
    # Durations
    "format_age",
    "format_duration",
    "parse_timestamp",
]
