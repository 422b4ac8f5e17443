"""Tests for log frame parsing."""

from __future__ import annotations

from kubik.controllers.logs.parsers.log_parser import (
    LogLine,
    parse_log_frame,
    since_time,
    truncate_to_seconds,
)


def test_parse_splits_at_first_space() -> None:
    line = parse_log_frame(b"2024-01-01T00:00:05.123Z GET /health 200")
    assert line == LogLine(timestamp="2024-01-01T00:00:05.123Z", message="GET /health 200")


def test_empty_frame_is_ignored() -> None:
    assert parse_log_frame(b"") is None


def test_frame_without_timestamp() -> None:
    line = parse_log_frame(b"orphan")
    assert line == LogLine(timestamp="", message="orphan")


def test_invalid_utf8_is_replaced() -> None:
    line = parse_log_frame(b"2024-01-01T00:00:05Z caf\xff")
    assert line is not None
    assert line.message == "caf�"


def test_truncate_to_seconds_drops_fraction_and_zone() -> None:
    assert truncate_to_seconds("2024-01-01T00:00:05.123456789Z") == "2024-01-01T00:00:05"
    assert truncate_to_seconds("2024-01-01T00:00:05Z") == "2024-01-01T00:00:05"
    assert truncate_to_seconds("2024-01-01T00:00:05.5+02:00") == "2024-01-01T00:00:05"


def test_since_time_keeps_zone() -> None:
    assert since_time("2024-01-01T00:00:05.123456789Z") == "2024-01-01T00:00:05Z"
    assert since_time("2024-01-01T00:00:05Z") == "2024-01-01T00:00:05Z"
    assert since_time("2024-01-01T00:00:05.5+02:00") == "2024-01-01T00:00:05+02:00"


def test_since_time_without_zone_is_utc() -> None:
    assert since_time("2024-01-01T00:00:05.123") == "2024-01-01T00:00:05Z"


def test_since_time_rejects_non_timestamps() -> None:
    assert since_time("") is None
    assert since_time("INFO") is None
