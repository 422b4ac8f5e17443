"""Tests for logging setup and the debug panel handler."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from kubik.utils.log_setup import (
    DebugPanelHandler,
    attach_handler,
    configure_logging,
    detach_handler,
)


@pytest.fixture(autouse=True)
def package_logger() -> Iterator[logging.Logger]:
    """Restore the package logger after each test."""
    logger = logging.getLogger("kubik")
    level, propagate, handlers = logger.level, logger.propagate, list(logger.handlers)
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_level_name(self, package_logger: logging.Logger, monkeypatch) -> None:
        monkeypatch.delenv("KUBIK_LOG_LEVEL", raising=False)

        assert configure_logging("debug") == logging.DEBUG
        assert package_logger.level == logging.DEBUG
        assert package_logger.propagate is False

    def test_unknown_level_falls_back_to_info(self, monkeypatch) -> None:
        monkeypatch.delenv("KUBIK_LOG_LEVEL", raising=False)

        assert configure_logging("chatty") == logging.INFO

    def test_environment_override(self, monkeypatch) -> None:
        monkeypatch.setenv("KUBIK_LOG_LEVEL", "WARNING")

        assert configure_logging("DEBUG") == logging.WARNING

    def test_log_file_added_once(
        self, package_logger: logging.Logger, tmp_path: Path, monkeypatch
    ) -> None:
        monkeypatch.delenv("KUBIK_LOG_LEVEL", raising=False)
        log_file = tmp_path / "kubik.log"

        configure_logging("INFO", log_file=str(log_file))
        configure_logging("INFO", log_file=str(log_file))
        logging.getLogger("kubik.test").info("hello file")

        file_handlers = [
            handler for handler in package_logger.handlers
            if isinstance(handler, logging.FileHandler)
        ]
        assert len(file_handlers) == 1
        file_handlers[0].flush()
        assert "kubik.test: hello file" in log_file.read_text(encoding="utf-8")


class TestDebugPanelHandler:
    """Tests for DebugPanelHandler."""

    def test_forwards_formatted_records(self, package_logger: logging.Logger) -> None:
        lines: list[str] = []
        handler = DebugPanelHandler(lines.append, logging.INFO)
        package_logger.setLevel(logging.DEBUG)
        attach_handler(handler)

        logging.getLogger("kubik.controllers").info("Watching for pods changes")
        logging.getLogger("kubik.controllers").debug("not shown")
        detach_handler(handler)
        logging.getLogger("kubik.controllers").info("after detach")

        assert len(lines) == 1
        assert "INFO" in lines[0]
        assert lines[0].endswith("Watching for pods changes")

    def test_sink_failure_is_handled(self, monkeypatch) -> None:
        def broken_sink(line: str) -> None:
            raise RuntimeError("panel gone")

        handler = DebugPanelHandler(broken_sink)
        handled: list[logging.LogRecord] = []
        monkeypatch.setattr(handler, "handleError", handled.append)

        handler.emit(logging.LogRecord("kubik", logging.INFO, __file__, 1, "msg", None, None))

        assert len(handled) == 1
