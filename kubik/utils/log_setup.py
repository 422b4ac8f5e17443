"""Logging setup for the dashboard.

The terminal belongs to the dashboard, so records never go to stderr while
it runs: they are mirrored into the in-app debug panel and, optionally,
written to a file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_PANEL_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"
_LEVEL_ENV_VAR = "KUBIK_LOG_LEVEL"
_PACKAGE_LOGGER = "kubik"


def _coerce_level(value: str | None, fallback: int) -> int:
    if not value:
        return fallback
    text = value.strip()
    if text.isdigit():
        return int(text)
    candidate = logging.getLevelName(text.upper())
    return candidate if isinstance(candidate, int) else fallback


class DebugPanelHandler(logging.Handler):
    """Forwards formatted records to a sink such as the debug panel.

    The sink must be safe to call from the event loop thread; records from
    other threads are dropped by the sink owner if it cannot accept them.
    """

    def __init__(self, sink: Callable[[str], None], level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._sink = sink
        self.setFormatter(logging.Formatter(_PANEL_FORMAT, datefmt=_DEFAULT_DATEFMT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._sink(self.format(record))
        except Exception:
            self.handleError(record)


def configure_logging(
    level: int | str = logging.INFO,
    *,
    log_file: str | None = None,
) -> int:
    """Configure the package logger.

    Environment overrides:
      - KUBIK_LOG_LEVEL: explicit log level

    Returns:
        The effective level.
    """
    fallback = _coerce_level(level, logging.INFO) if isinstance(level, str) else int(level)
    effective = _coerce_level(os.environ.get(_LEVEL_ENV_VAR), fallback)

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(effective)
    package_logger.propagate = False
    if log_file and not any(
        isinstance(handler, logging.FileHandler) for handler in package_logger.handlers
    ):
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT))
        package_logger.addHandler(file_handler)
    return effective


def attach_handler(handler: logging.Handler) -> None:
    logging.getLogger(_PACKAGE_LOGGER).addHandler(handler)


def detach_handler(handler: logging.Handler) -> None:
    logging.getLogger(_PACKAGE_LOGGER).removeHandler(handler)
