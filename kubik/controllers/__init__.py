"""Controllers for cluster access, namespace watches and pod logs."""

from kubik.controllers.base import (
    AuthenticationFailed,
    AuthRequired,
    BaseController,
    ConnectionSetupError,
    DashboardListener,
    KubikError,
    NotFound,
    ProtocolError,
    WatchExpired,
)
from kubik.controllers.cluster import (
    ClusterClient,
    ConnectionProfile,
    Credentials,
    OAuthAuthenticator,
    load_profile,
)
from kubik.controllers.logs import FollowSession, LogFollower
from kubik.controllers.pods import PodWatchController
from kubik.controllers.streaming import StreamEnd, StreamHandle, StreamingRequest

__all__ = [
    "AuthRequired",
    "AuthenticationFailed",
    "BaseController",
    "ClusterClient",
    "ConnectionProfile",
    "ConnectionSetupError",
    "Credentials",
    "DashboardListener",
    "FollowSession",
    "KubikError",
    "LogFollower",
    "NotFound",
    "OAuthAuthenticator",
    "PodWatchController",
    "ProtocolError",
    "StreamEnd",
    "StreamHandle",
    "StreamingRequest",
    "WatchExpired",
    "load_profile",
]
