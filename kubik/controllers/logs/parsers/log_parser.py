"""Parsing of timestamped pod log frames.

Log lines requested with `timestamps=true` look like:

    2024-01-01T00:00:05.123456789Z hello world
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# RFC 3339 date-time: whole seconds, optional fraction, optional zone
_TIMESTAMP_RE = re.compile(
    r"^(?P<seconds>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.\d+)?(?P<zone>Z|[+-]\d{2}:\d{2})?$"
)


@dataclass(frozen=True)
class LogLine:
    """One log line split into its server timestamp and message."""

    timestamp: str
    message: str


def parse_log_frame(frame: bytes) -> LogLine | None:
    """Split a frame at its first space.

    Returns:
        None for empty frames (keep-alive artifacts). A frame without a
        space has an empty timestamp and carries the whole text as message.
    """
    if not frame:
        return None
    text = frame.decode("utf-8", errors="replace")
    timestamp, separator, message = text.partition(" ")
    if not separator:
        return LogLine(timestamp="", message=text)
    return LogLine(timestamp=timestamp, message=message)


def truncate_to_seconds(timestamp: str) -> str:
    """Return the whole-second prefix of a timestamp, without fraction or zone.

    Lines whose timestamp starts with this prefix may be replayed by a
    reconnect resuming at the same second.

        "2024-01-01T00:00:05.123Z" -> "2024-01-01T00:00:05"
        "2024-01-01T00:00:05Z"     -> "2024-01-01T00:00:05"
    """
    match = _TIMESTAMP_RE.match(timestamp)
    if match is None:
        head, _, _ = timestamp.partition(".")
        return head
    return match.group("seconds")


def since_time(timestamp: str) -> str | None:
    """Return the `sinceTime` value resuming a log at the timestamp's second.

    The server parses `sinceTime` as RFC 3339, which requires a zone, and
    ignores fractions. Timestamps without a zone are taken as UTC.

    Returns:
        None when the timestamp is not an RFC 3339 date-time.
    """
    match = _TIMESTAMP_RE.match(timestamp)
    if match is None:
        return None
    return match.group("seconds") + (match.group("zone") or "Z")
