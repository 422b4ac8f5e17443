"""CancellationRegistry - named groups of cancellable in-flight operations.

This module provides CancellationRegistry, a table of cancellation scopes
used to tear down open streams and timers when the user changes context.

Usage:
    from kubik.utils.cancellations import CancellationRegistry

    registry = CancellationRegistry()
    registry.add("watch.logs", handle.cancel)

    # Cancel and forget every handle registered under the scope
    registry.run("watch.logs")
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

CancellationHandle = Callable[[], None]


class _OnceHandle:
    """Wraps a cancellation callable so that only the first call is forwarded."""

    __slots__ = ("_handle", "_lock", "_called")

    def __init__(self, handle: CancellationHandle) -> None:
        self._handle = handle
        self._lock = threading.Lock()
        self._called = False

    @property
    def called(self) -> bool:
        return self._called

    def wraps(self, handle: CancellationHandle) -> bool:
        return self._handle == handle

    def __call__(self) -> None:
        with self._lock:
            if self._called:
                return
            self._called = True
        self._handle()


class CancellationRegistry:
    """Table of named cancellation scopes.

    - `add()` records a handle under a scope, creating the scope implicitly
    - `run()` invokes and removes every handle currently under one scope
    - Scopes are independent: running "watch" leaves "watch.logs" untouched

    Both operations may interleave from different flows of control. `run()`
    detaches the handles under the lock and invokes them after releasing it,
    so a handle added while a run is in progress is either part of that run
    or survives for the next one.
    """

    def __init__(self) -> None:
        self._scopes: dict[str, list[_OnceHandle]] = {}
        self._lock = threading.Lock()

    def add(self, scope: str, handle: CancellationHandle) -> None:
        """Record a cancellation handle under a scope.

        Args:
            scope: Scope name. An empty name is a no-op scope.
            handle: Callable that cancels exactly one operation.
        """
        if not scope:
            logger.debug("Ignoring cancellation handle registered without a scope")
            return
        wrapped = handle if isinstance(handle, _OnceHandle) else _OnceHandle(handle)
        with self._lock:
            self._scopes.setdefault(scope, []).append(wrapped)

    def run(self, scope: str) -> int:
        """Cancel and remove every handle registered under a scope.

        Unknown or empty scopes are a no-op.

        Returns:
            Number of handles invoked.
        """
        with self._lock:
            handles = self._scopes.pop(scope, [])
        for handle in handles:
            try:
                handle()
            except Exception:
                logger.exception("Cancellation handle failed in scope %s", scope)
        if handles:
            logger.debug("Cancelled %d operation(s) in scope %s", len(handles), scope)
        return len(handles)

    def discard(self, scope: str, handle: CancellationHandle) -> bool:
        """Forget a handle whose operation already finished, without invoking it.

        Returns:
            True when the handle was registered under the scope.
        """
        with self._lock:
            handles = self._scopes.get(scope)
            if not handles:
                return False
            for index, wrapped in enumerate(handles):
                if wrapped is handle or wrapped.wraps(handle):
                    del handles[index]
                    if not handles:
                        del self._scopes[scope]
                    return True
        return False

    def pending(self, scope: str) -> int:
        """Return the number of handles currently registered under a scope."""
        with self._lock:
            return len(self._scopes.get(scope, ()))

    def scopes(self) -> list[str]:
        """Return the names of scopes that currently hold handles."""
        with self._lock:
            return [name for name, handles in self._scopes.items() if handles]

    def run_all(self) -> int:
        """Cancel every scope, used on shutdown."""
        total = 0
        for scope in self.scopes():
            total += self.run(scope)
        return total
