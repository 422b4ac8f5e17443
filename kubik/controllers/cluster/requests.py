"""Request builders for the cluster API calls the dashboard makes."""

from __future__ import annotations

from kubik.constants.values import (
    API_ROOT_PATH,
    NAMESPACES_PATH,
    OAUTH_AUTHORIZE_PATH,
    OAUTH_CLIENT_ID,
    PROJECTS_PATH,
)
from kubik.models.core.request import Credentials, RequestSpec


def get_apis() -> RequestSpec:
    return RequestSpec(path=API_ROOT_PATH)


def get_namespaces() -> RequestSpec:
    return RequestSpec(path=NAMESPACES_PATH)


def get_projects() -> RequestSpec:
    return RequestSpec(path=PROJECTS_PATH)


def get_pods(namespace: str) -> RequestSpec:
    return RequestSpec(path=f"{NAMESPACES_PATH}/{namespace}/pods")


def get_pod(namespace: str, name: str) -> RequestSpec:
    return RequestSpec(path=f"{NAMESPACES_PATH}/{namespace}/pods/{name}")


def watch_pods(namespace: str, resource_version: str) -> RequestSpec:
    """Watch the pods of a namespace from a resource version."""
    return RequestSpec(
        path=f"{NAMESPACES_PATH}/{namespace}/pods",
        params={"watch": "true", "resourceVersion": resource_version},
    )


def follow_log(
    namespace: str,
    name: str,
    tail_lines: int,
    since_time: str | None = None,
) -> RequestSpec:
    """Follow a pod log with timestamps, optionally from `since_time`."""
    params = {
        "follow": "true",
        "tailLines": str(tail_lines),
        "timestamps": "true",
    }
    if since_time:
        params["sinceTime"] = since_time
    return RequestSpec(
        path=f"{NAMESPACES_PATH}/{namespace}/pods/{name}/log",
        params=params,
    )


def oauth_authorize(credentials: Credentials) -> RequestSpec:
    """OpenShift OAuth implicit-flow challenge; the token comes back in a redirect."""
    return RequestSpec(
        path=OAUTH_AUTHORIZE_PATH,
        params={"client_id": OAUTH_CLIENT_ID, "response_type": "token"},
        headers={"X-Csrf-Token": "1"},
        basic_auth=credentials,
        follow_redirects=False,
    )


__all__ = [
    "Credentials",
    "RequestSpec",
    "follow_log",
    "get_apis",
    "get_namespaces",
    "get_pod",
    "get_pods",
    "get_projects",
    "oauth_authorize",
    "watch_pods",
]
