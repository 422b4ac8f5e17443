"""OpenShift OAuth implicit-flow authentication.

See https://docs.openshift.org/latest/architecture/additional_concepts/authentication.html
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from kubik.controllers.base.errors import AuthenticationFailed, AuthRequired
from kubik.controllers.cluster.requests import Credentials, oauth_authorize

if TYPE_CHECKING:
    from kubik.controllers.cluster.client import ClusterClient

logger = logging.getLogger(__name__)

CredentialsProvider = Callable[[], Awaitable[Credentials]]


class OAuthAuthenticator:
    """Trades prompted username/password for a bearer token."""

    _TOKEN_RE = re.compile(r"access_token=([^&]+)")

    def __init__(
        self,
        credentials_provider: CredentialsProvider,
        *,
        max_prompts: int = 3,
    ) -> None:
        self._credentials_provider = credentials_provider
        self._max_prompts = max(1, max_prompts)

    @classmethod
    def extract_token(cls, location: str) -> str | None:
        """Extract the access token from a redirect `location` header."""
        match = cls._TOKEN_RE.search(location or "")
        return match.group(1) if match else None

    async def authenticate(self, client: ClusterClient) -> str:
        """Prompt for credentials and install the obtained bearer token.

        Returns:
            The access token.

        Raises:
            AuthenticationFailed: When the cluster offers no OAuth server, the
                credentials are rejected `max_prompts` times, or the response
                carries no token.
        """
        if not client.is_openshift:
            raise AuthenticationFailed(f"No authentication available for: {client.base_url}")

        for attempt in range(1, self._max_prompts + 1):
            credentials = await self._credentials_provider()
            client.clear_authorization()
            try:
                response = await client.request(oauth_authorize(credentials))
            except AuthRequired:
                logger.warning(
                    "Authentication required for %s (openshift), attempt %s/%s",
                    client.base_url,
                    attempt,
                    self._max_prompts,
                )
                continue

            token = self.extract_token(response.headers.get("location", ""))
            if not token:
                raise AuthenticationFailed(
                    f"OAuth server at {client.base_url} returned no access token"
                )
            client.set_bearer_token(token)
            logger.info("Authenticated against %s as %s", client.base_url, credentials.username)
            return token

        raise AuthenticationFailed(
            f"Credentials rejected by {client.base_url} after {self._max_prompts} attempt(s)"
        )
