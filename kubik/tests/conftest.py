"""Shared fixtures for Kubik unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from kubik.controllers.cluster.client import ClusterClient
from kubik.controllers.cluster.connection import ConnectionProfile
from kubik.tests.helpers import SERVER, RecordingListener


@pytest.fixture
def profile() -> ConnectionProfile:
    return ConnectionProfile(server=SERVER)


@pytest.fixture
def make_client(profile: ConnectionProfile) -> Callable[..., ClusterClient]:
    """Factory building a ClusterClient on an httpx.MockTransport."""

    def factory(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> ClusterClient:
        return ClusterClient(profile, transport=httpx.MockTransport(handler), **kwargs)

    return factory


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()
