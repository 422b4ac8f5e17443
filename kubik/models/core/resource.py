"""Mirrored resource models: pods, watch events and the namespace snapshot."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from kubik.constants.enums import WatchEventType


class ObjectMeta(BaseModel):
    """Identity fields of a resource; other metadata passes through."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    uid: str = ""
    name: str = ""
    namespace: str = ""
    resource_version: str | None = Field(default=None, alias="resourceVersion")
    deletion_timestamp: str | None = Field(default=None, alias="deletionTimestamp")


class ResourceStatus(BaseModel):
    """Status projection the dashboard displays."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    phase: str = "Unknown"
    start_time: str | None = Field(default=None, alias="startTime")


class Resource(BaseModel):
    """A single mirrored resource (a pod)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    status: ResourceStatus = Field(default_factory=ResourceStatus)

    @property
    def uid(self) -> str:
        return self.metadata.uid

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def phase(self) -> str:
        return self.status.phase

    @property
    def is_terminating(self) -> bool:
        return bool(self.metadata.deletion_timestamp)


class WatchEvent(BaseModel):
    """One change notification from a watch stream."""

    type: WatchEventType
    object: Resource

    @property
    def resource_version(self) -> str | None:
        return self.object.metadata.resource_version


class AppliedChange(BaseModel):
    """Outcome of applying a WatchEvent to a snapshot."""

    kind: WatchEventType
    resource: Resource
    index: int


class ResourceSnapshot(BaseModel):
    """Ordered mirror of a namespace's resources plus the list version.

    Items keep display order (appends go last), are unique by UID, and
    `resource_version` tracks the last applied list or event.
    """

    items: list[Resource] = Field(default_factory=list)
    resource_version: str = ""

    @classmethod
    def from_list_response(cls, payload: dict[str, Any]) -> ResourceSnapshot:
        """Build a snapshot from a list response body."""
        items = payload.get("items") or []
        metadata = payload.get("metadata") or {}
        return cls(
            items=[Resource.model_validate(item) for item in items],
            resource_version=str(metadata.get("resourceVersion") or ""),
        )

    def index_of(self, uid: str) -> int:
        """Return the position of the item with this UID, or -1."""
        for index, item in enumerate(self.items):
            if item.uid == uid:
                return index
        return -1

    def find_by_name(self, name: str) -> Resource | None:
        for item in self.items:
            if item.name == name:
                return item
        return None

    def replace(self, other: ResourceSnapshot) -> None:
        """Replace items and version wholesale."""
        self.items = list(other.items)
        self.resource_version = other.resource_version

    def clear(self) -> None:
        self.items = []
        self.resource_version = ""

    def apply(self, event: WatchEvent) -> AppliedChange | None:
        """Apply one watch event in place.

        ADDED for a known UID and MODIFIED for an unknown UID are folded into
        the other case. DELETED for an unknown UID changes nothing.

        Returns:
            The applied change, or None when no item changed.
        """
        resource = event.object
        index = self.index_of(resource.uid)
        change: AppliedChange | None = None

        if event.type is WatchEventType.DELETED:
            if index >= 0:
                removed = self.items.pop(index)
                change = AppliedChange(
                    kind=WatchEventType.DELETED, resource=removed, index=index
                )
        elif index >= 0:
            self.items[index] = resource
            change = AppliedChange(
                kind=WatchEventType.MODIFIED, resource=resource, index=index
            )
        else:
            self.items.append(resource)
            change = AppliedChange(
                kind=WatchEventType.ADDED,
                resource=resource,
                index=len(self.items) - 1,
            )

        if event.resource_version:
            self.resource_version = event.resource_version
        return change
