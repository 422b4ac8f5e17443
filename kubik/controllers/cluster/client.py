"""Cluster API client: JSON requests and streams with credential recovery.

All calls share one httpx.AsyncClient carrying the profile's TLS material
and bearer token. A 401/403 triggers the authenticator once and the call is
retried; a second rejection is surfaced as AuthenticationFailed.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx

from kubik.constants.timeouts import CLUSTER_CONNECT_TIMEOUT, CLUSTER_REQUEST_TIMEOUT
from kubik.constants.values import ACCEPT_HEADER, OPENSHIFT_API_PATHS
from kubik.controllers.base.errors import (
    AuthenticationFailed,
    AuthRequired,
    ConnectionSetupError,
    KubikError,
    ProtocolError,
    error_for_status,
)
from kubik.controllers.cluster import requests
from kubik.controllers.cluster.auth import OAuthAuthenticator
from kubik.controllers.cluster.connection import ConnectionProfile
from kubik.controllers.cluster.requests import RequestSpec
from kubik.controllers.streaming.stream import (
    FrameConsumer,
    StreamHandle,
    StreamingRequest,
)
from kubik.models.core.resource import Resource, ResourceSnapshot

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClusterClient:
    """Issues the list/status/watch/log calls of the dashboard."""

    def __init__(
        self,
        profile: ConnectionProfile,
        *,
        authenticator: OAuthAuthenticator | None = None,
        request_timeout: float = CLUSTER_REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            profile: Server address, TLS material and initial credential.
            authenticator: Invoked on 401/403; without one those errors propagate.
            request_timeout: Timeout for non-streaming calls, in seconds.
            transport: Optional transport override (tests).
        """
        self.profile = profile
        self.apis: list[str] = []
        self._authenticator = authenticator
        self._auth_lock = asyncio.Lock()
        self._auth_generation = 0

        headers = {"Accept": ACCEPT_HEADER}
        if profile.token:
            headers["Authorization"] = f"Bearer {profile.token}"
        options: dict[str, Any] = {
            "base_url": profile.server,
            "headers": headers,
            "timeout": httpx.Timeout(request_timeout, connect=CLUSTER_CONNECT_TIMEOUT),
            "follow_redirects": False,
        }
        if transport is not None:
            options["transport"] = transport
        else:
            options["verify"] = profile.ssl_context()
        self._http = httpx.AsyncClient(**options)
        self._streaming = StreamingRequest(self._http, connect_timeout=CLUSTER_CONNECT_TIMEOUT)

    @property
    def base_url(self) -> str:
        return self.profile.server

    @property
    def is_openshift(self) -> bool:
        return any(path in OPENSHIFT_API_PATHS for path in self.apis)

    @property
    def authorization(self) -> str | None:
        return self._http.headers.get("Authorization")

    def set_bearer_token(self, token: str) -> None:
        self._http.headers["Authorization"] = f"Bearer {token}"

    def clear_authorization(self) -> None:
        self._http.headers.pop("Authorization", None)

    async def aclose(self) -> None:
        await self._http.aclose()

    # =========================================================================
    # Transport
    # =========================================================================

    async def request(self, spec: RequestSpec) -> httpx.Response:
        """Send one request without credential recovery.

        Redirects are returned as is when the spec does not follow them.

        Raises:
            ConnectionSetupError: On transport failure or unexpected status.
        """
        try:
            response = await self._http.request(
                spec.method,
                spec.path,
                params=spec.params or None,
                headers=spec.headers or None,
                auth=spec.httpx_auth(),
                follow_redirects=spec.follow_redirects,
            )
        except httpx.HTTPError as exc:
            raise ConnectionSetupError(f"{spec.method} {spec.path} failed: {exc}") from exc
        if response.is_success or (response.is_redirect and not spec.follow_redirects):
            return response
        raise error_for_status(
            response.status_code,
            f"{spec.method} {spec.path} returned {response.status_code}",
        )

    async def authenticate(self) -> None:
        """Run the authenticator, once for concurrent callers.

        Raises:
            AuthenticationFailed: When no authenticator is configured or it fails.
        """
        if self._authenticator is None:
            raise AuthenticationFailed(f"No authentication available for: {self.base_url}")
        generation = self._auth_generation
        async with self._auth_lock:
            if generation != self._auth_generation:
                # Another caller refreshed the credential while we waited
                return
            await self._authenticator.authenticate(self)
            self._auth_generation += 1

    async def _authenticated(self, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await operation()
        except AuthRequired:
            if self._authenticator is None:
                raise
            logger.info("Authentication required for %s", self.base_url)
        await self.authenticate()
        try:
            return await operation()
        except AuthRequired as exc:
            raise AuthenticationFailed(
                f"Fresh credential rejected by {self.base_url} ({exc.status_code})"
            ) from exc

    async def get_json(self, spec: RequestSpec) -> Any:
        """GET a JSON document with credential recovery.

        Raises:
            ConnectionSetupError: On transport failure or unexpected status.
            AuthenticationFailed: When a fresh credential is rejected.
            ProtocolError: When the body is not JSON.
        """
        response = await self._authenticated(lambda: self.request(spec))
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ProtocolError(f"Invalid JSON from {spec.path}: {exc}") from exc

    async def open_stream(
        self,
        spec: RequestSpec,
        consumer: FrameConsumer,
        *,
        on_handle: Callable[[StreamHandle], None] | None = None,
    ) -> StreamHandle:
        """Start a stream and wait until its response headers are accepted.

        `on_handle` receives each started handle before connecting, so the
        caller can register its cancellation while the request is in flight.
        """

        async def attempt() -> StreamHandle:
            handle = self._streaming.start_stream(spec, consumer)
            if on_handle is not None:
                on_handle(handle)
            await handle.wait_open()
            return handle

        return await self._authenticated(attempt)

    # =========================================================================
    # API calls
    # =========================================================================

    async def discover_apis(self) -> list[str]:
        """Fetch the advertised API paths; failures leave `apis` empty."""
        try:
            payload = await self.get_json(requests.get_apis())
        except KubikError as exc:
            logger.warning("Unable to retrieve available APIs: %s", exc)
            return self.apis
        self.apis = [str(path) for path in (payload or {}).get("paths", [])]
        logger.debug("Discovered %d API paths (openshift=%s)", len(self.apis), self.is_openshift)
        return self.apis

    async def list_namespaces(self) -> list[str]:
        """List namespace names (projects on OpenShift)."""
        spec = requests.get_projects() if self.is_openshift else requests.get_namespaces()
        payload = await self.get_json(spec)
        return [
            item.get("metadata", {}).get("name", "")
            for item in (payload or {}).get("items") or []
        ]

    async def list_pods(self, namespace: str) -> ResourceSnapshot:
        payload = await self.get_json(requests.get_pods(namespace))
        return ResourceSnapshot.from_list_response(payload or {})

    async def get_pod(self, namespace: str, name: str) -> Resource:
        payload = await self.get_json(requests.get_pod(namespace, name))
        return Resource.model_validate(payload or {})
