"""Constants module for the Kubik dashboard.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (scopes, API paths, display sizes)
- timeouts.py: Timeout and interval values (seconds)
- defaults.py: Default values for settings
"""

from kubik.constants.enums import (
    LogLabelState,
    StreamEndReason,
    WatchEventType,
    WatchState,
)
from kubik.constants.timeouts import (
    AGE_REFRESH_INTERVAL,
    CLUSTER_REQUEST_TIMEOUT,
    LOG_RECONNECT_DELAY,
    WATCH_RECONNECT_DELAY,
)
from kubik.constants.values import (
    APP_TITLE,
    DEFAULT_NAMESPACE,
    LOG_TAIL_LINES,
    SCOPE_LOGS,
    SCOPE_REFRESH,
    SCOPE_WATCH,
)

__all__ = [
    "AGE_REFRESH_INTERVAL",
    # Application
    "APP_TITLE",
    # Timeouts
    "CLUSTER_REQUEST_TIMEOUT",
    "DEFAULT_NAMESPACE",
    "LOG_RECONNECT_DELAY",
    "LOG_TAIL_LINES",
    # Scopes
    "SCOPE_LOGS",
    "SCOPE_REFRESH",
    "SCOPE_WATCH",
    "WATCH_RECONNECT_DELAY",
    # Enums
    "LogLabelState",
    "StreamEndReason",
    "WatchEventType",
    "WatchState",
]
