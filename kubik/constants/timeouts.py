"""Timeout constants for the dashboard.

All timeout and interval values for API requests, reconnects and refresh cycles.
"""

from typing import Final

# ============================================================================
# API request timeouts (float, in seconds)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = 30.0
CLUSTER_CONNECT_TIMEOUT: Final = 10.0

# ============================================================================
# Reconnect and refresh intervals (float, in seconds)
# ============================================================================

# Fixed delay between a log-follow disconnect and the status check/reconnect.
LOG_RECONNECT_DELAY: Final = 1.0
# Watch reconnects are immediate, the server paces watch lifetime itself.
WATCH_RECONNECT_DELAY: Final = 0.0
AGE_REFRESH_INTERVAL: Final = 1.0

__all__ = [
    "AGE_REFRESH_INTERVAL",
    "CLUSTER_CONNECT_TIMEOUT",
    "CLUSTER_REQUEST_TIMEOUT",
    "LOG_RECONNECT_DELAY",
    "WATCH_RECONNECT_DELAY",
]
