"""Scalar constants for the dashboard."""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "Kubik"
DEFAULT_NAMESPACE: Final = "default"

# ============================================================================
# Cancellation scopes
# ============================================================================

SCOPE_WATCH: Final = "watch"
SCOPE_LOGS: Final = "watch.logs"
SCOPE_REFRESH: Final = "watch.refresh"

# ============================================================================
# API paths and parameters
# ============================================================================

API_ROOT_PATH: Final = "/"
NAMESPACES_PATH: Final = "/api/v1/namespaces"
PROJECTS_PATH: Final = "/oapi/v1/projects"
OPENSHIFT_API_PATHS: Final = ("/oapi", "/oapi/v1")
OAUTH_AUTHORIZE_PATH: Final = "/oauth/authorize"
OAUTH_CLIENT_ID: Final = "openshift-challenging-client"
ACCEPT_HEADER: Final = "application/json, text/plain, */*"

LOG_TAIL_LINES: Final = 25
POD_PHASE_RUNNING: Final = "Running"

# ============================================================================
# Display
# ============================================================================

LOG_BUFFER_LENGTH: Final = 50
DEBUG_BUFFER_LENGTH: Final = 100
LOGS_LABEL: Final = "Logs"

__all__ = [
    "ACCEPT_HEADER",
    "API_ROOT_PATH",
    "APP_TITLE",
    "DEBUG_BUFFER_LENGTH",
    "DEFAULT_NAMESPACE",
    "LOGS_LABEL",
    "LOG_BUFFER_LENGTH",
    "LOG_TAIL_LINES",
    "NAMESPACES_PATH",
    "OAUTH_AUTHORIZE_PATH",
    "OAUTH_CLIENT_ID",
    "OPENSHIFT_API_PATHS",
    "POD_PHASE_RUNNING",
    "PROJECTS_PATH",
    "SCOPE_LOGS",
    "SCOPE_REFRESH",
    "SCOPE_WATCH",
]
