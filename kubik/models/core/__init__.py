"""Core resource models."""

from kubik.models.core.request import Credentials, RequestSpec
from kubik.models.core.resource import (
    AppliedChange,
    ObjectMeta,
    Resource,
    ResourceSnapshot,
    ResourceStatus,
    WatchEvent,
)

__all__ = [
    "AppliedChange",
    "Credentials",
    "ObjectMeta",
    "RequestSpec",
    "Resource",
    "ResourceSnapshot",
    "ResourceStatus",
    "WatchEvent",
]
