"""Dashboard session state shared by the watch and log controllers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from kubik.constants.values import (
    DEFAULT_NAMESPACE,
    SCOPE_LOGS,
    SCOPE_REFRESH,
    SCOPE_WATCH,
)
from kubik.models.core.resource import ResourceSnapshot
from kubik.utils.cancellations import CancellationRegistry

logger = logging.getLogger(__name__)


@dataclass
class DashboardSession:
    """Explicit context for one dashboard instance.

    Attributes:
        namespace: Namespace currently watched
        selected_pod: Name of the pod whose log is followed, if any
        snapshot: Mirrored pods of the namespace
        cancellations: Scopes of in-flight streams and timers
        namespaces: Namespace names from the last namespace listing
    """

    namespace: str = DEFAULT_NAMESPACE
    selected_pod: str | None = None
    snapshot: ResourceSnapshot = field(default_factory=ResourceSnapshot)
    cancellations: CancellationRegistry = field(default_factory=CancellationRegistry)
    namespaces: list[str] = field(default_factory=list)

    def select_pod(self, name: str) -> bool:
        """Select a pod, cancelling the log stream of the previous one.

        Returns:
            False when the pod is already selected.
        """
        if name == self.selected_pod:
            return False
        self.cancellations.run(SCOPE_LOGS)
        self.selected_pod = name
        return True

    def clear_selection(self) -> None:
        self.cancellations.run(SCOPE_LOGS)
        self.selected_pod = None

    def teardown(self) -> None:
        """Cancel every operation bound to the current namespace."""
        logger.debug("Cancelling background tasks for namespace %s", self.namespace)
        self.cancellations.run(SCOPE_WATCH)
        self.cancellations.run(SCOPE_REFRESH)
        self.cancellations.run(SCOPE_LOGS)

    def switch_namespace(self, namespace: str) -> bool:
        """Tear down the current namespace and reset state for a new one.

        Returns:
            False when the namespace is already active.
        """
        if namespace == self.namespace:
            return False
        self.teardown()
        self.namespace = namespace
        self.selected_pod = None
        self.snapshot.clear()
        logger.debug("Switching to namespace %s", namespace)
        return True
