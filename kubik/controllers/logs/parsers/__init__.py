"""Log frame parsers."""

from kubik.controllers.logs.parsers.log_parser import (
    LogLine,
    parse_log_frame,
    since_time,
    truncate_to_seconds,
)

__all__ = ["LogLine", "parse_log_frame", "since_time", "truncate_to_seconds"]
