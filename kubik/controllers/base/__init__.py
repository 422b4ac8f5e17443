"""Base controller classes and errors."""

from kubik.controllers.base.base_controller import BaseController
from kubik.controllers.base.listener import DashboardListener
from kubik.controllers.base.errors import (
    AuthenticationFailed,
    AuthRequired,
    ConnectionSetupError,
    KubikError,
    NotFound,
    ProtocolError,
    WatchExpired,
    error_for_status,
)

__all__ = [
    "AuthRequired",
    "AuthenticationFailed",
    "BaseController",
    "ConnectionSetupError",
    "DashboardListener",
    "KubikError",
    "NotFound",
    "ProtocolError",
    "WatchExpired",
    "error_for_status",
]
