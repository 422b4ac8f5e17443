"""Exception taxonomy for cluster access and streaming."""

from __future__ import annotations


class KubikError(Exception):
    """Base exception for dashboard core errors."""


class ConnectionSetupError(KubikError):
    """Raised when a request fails before any response data is streamed.

    Covers DNS, TLS handshake, transport failures and non-2xx status codes.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthRequired(ConnectionSetupError):
    """Raised on 401/403 responses."""


class NotFound(ConnectionSetupError):
    """Raised on 404 responses."""


class AuthenticationFailed(KubikError):
    """Raised when no credential can be obtained or a fresh one is rejected."""


class ProtocolError(KubikError):
    """Raised when a frame payload cannot be decoded."""


class WatchExpired(ProtocolError):
    """Raised for a watch ERROR frame reporting an expired resource version."""


def error_for_status(status_code: int, message: str) -> ConnectionSetupError:
    """Map an HTTP status code onto the matching setup error."""
    if status_code in (401, 403):
        return AuthRequired(message, status_code=status_code)
    if status_code == 404:
        return NotFound(message, status_code=status_code)
    return ConnectionSetupError(message, status_code=status_code)
