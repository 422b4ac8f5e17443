"""All enum definitions for the dashboard.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Watch Enums
# =============================================================================


class WatchEventType(Enum):
    """Change event types delivered by a watch stream."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"


class WatchState(Enum):
    """Lifecycle states of a namespace watch."""

    IDLE = "idle"
    LISTING = "listing"
    WATCHING = "watching"
    RECONNECTING = "reconnecting"


# =============================================================================
# Stream Enums
# =============================================================================


class StreamEndReason(Enum):
    """Why a streaming request stopped delivering frames."""

    CLOSED = "closed"
    ERROR = "error"
    CANCELLED = "cancelled"


# =============================================================================
# Log Enums
# =============================================================================


class LogLabelState(Enum):
    """Markers shown next to the followed workload name."""

    NONE = ""
    TERMINATING = "TERMINATING"
    DELETED = "DELETED"
