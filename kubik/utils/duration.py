"""Duration formatting utilities for pod ages.

Provides functions to turn Kubernetes timestamps into compact age strings:
- "1y 2M", "3M 4d", "5d 6h", "7h 8m", "9m 10s", "11s"
"""

from __future__ import annotations

from contextlib import suppress
from datetime import datetime, timezone
from typing import Any

# Calendar approximations used for display only.
_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 60 * _SECONDS_PER_MINUTE
_SECONDS_PER_DAY = 24 * _SECONDS_PER_HOUR
_DAYS_PER_MONTH = 30
_DAYS_PER_YEAR = 365


def parse_timestamp(timestamp: Any) -> datetime | None:
    """Parse a Kubernetes RFC 3339 timestamp into an aware datetime.

    Args:
        timestamp: Timestamp string such as "2024-01-01T00:00:05Z"

    Returns:
        Aware datetime, or None when the value is missing or malformed.
    """
    if not isinstance(timestamp, str) or not timestamp:
        return None
    with suppress(ValueError, TypeError):
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return None


def format_duration(seconds: float) -> str:
    """Format a duration using its two most significant units.

    Args:
        seconds: Duration in seconds. Negative values (clock skew) count as 0.

    Returns:
        Compact duration string.
    """
    total = max(0, int(seconds))
    days, remainder = divmod(total, _SECONDS_PER_DAY)
    hours, remainder = divmod(remainder, _SECONDS_PER_HOUR)
    minutes, secs = divmod(remainder, _SECONDS_PER_MINUTE)
    years, days = divmod(days, _DAYS_PER_YEAR)
    months, days = divmod(days, _DAYS_PER_MONTH)

    if years > 0:
        return f"{years}y {months}M"
    if months > 0:
        return f"{months}M {days}d"
    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_age(start_time: Any, now: datetime | None = None) -> str:
    """Format the age of a resource from its start timestamp.

    Returns an empty string when the resource has not started yet.
    """
    started = parse_timestamp(start_time) if not isinstance(start_time, datetime) else start_time
    if started is None:
        return ""
    current = now or datetime.now(timezone.utc)
    return format_duration((current - started).total_seconds())
