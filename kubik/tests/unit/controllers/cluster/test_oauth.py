"""Tests for the OpenShift OAuth authenticator."""

from __future__ import annotations

import base64

import httpx
import pytest

from kubik.controllers.base.errors import AuthenticationFailed
from kubik.controllers.cluster.auth import OAuthAuthenticator
from kubik.models.core.request import Credentials

_REDIRECT = (
    "https://cluster.test:8443/oauth/token/implicit"
    "#access_token=abc123&expires_in=86400&token_type=Bearer"
)


def _prompts(*credentials: Credentials):
    pending = list(credentials)

    async def provider() -> Credentials:
        return pending.pop(0)

    return provider


class TestOAuthAuthenticator:
    """Tests for OAuthAuthenticator."""

    def test_extract_token(self) -> None:
        assert OAuthAuthenticator.extract_token(_REDIRECT) == "abc123"
        assert OAuthAuthenticator.extract_token("https://cluster.test/#error=denied") is None
        assert OAuthAuthenticator.extract_token("") is None

    @pytest.mark.asyncio
    async def test_not_available_without_openshift(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(500))
        authenticator = OAuthAuthenticator(_prompts())

        with pytest.raises(AuthenticationFailed, match="No authentication available for"):
            await authenticator.authenticate(client)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_obtains_and_installs_token(self, make_client) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(302, headers={"location": _REDIRECT})

        client = make_client(handler)
        client.apis = ["/oapi"]
        client.set_bearer_token("stale")
        authenticator = OAuthAuthenticator(_prompts(Credentials("alice", "pw")))

        token = await authenticator.authenticate(client)

        assert token == "abc123"
        assert client.authorization == "Bearer abc123"
        request = seen[0]
        assert request.url.path == "/oauth/authorize"
        assert request.url.params["client_id"] == "openshift-challenging-client"
        assert request.url.params["response_type"] == "token"
        assert request.headers["X-Csrf-Token"] == "1"
        expected = base64.b64encode(b"alice:pw").decode("ascii")
        assert request.headers["Authorization"] == f"Basic {expected}"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_reprompts_after_rejected_credentials(self, make_client) -> None:
        responses = iter(
            [httpx.Response(401), httpx.Response(302, headers={"location": _REDIRECT})]
        )
        client = make_client(lambda request: next(responses))
        client.apis = ["/oapi/v1"]
        authenticator = OAuthAuthenticator(
            _prompts(Credentials("alice", "wrong"), Credentials("alice", "right"))
        )

        assert await authenticator.authenticate(client) == "abc123"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_gives_up_after_max_prompts(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(401))
        client.apis = ["/oapi"]
        authenticator = OAuthAuthenticator(
            _prompts(Credentials("a", "1"), Credentials("a", "2")), max_prompts=2
        )

        with pytest.raises(AuthenticationFailed, match="after 2 attempt"):
            await authenticator.authenticate(client)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_redirect_without_token(self, make_client) -> None:
        client = make_client(
            lambda request: httpx.Response(302, headers={"location": "https://cluster.test/"})
        )
        client.apis = ["/oapi"]
        authenticator = OAuthAuthenticator(_prompts(Credentials("alice", "pw")))

        with pytest.raises(AuthenticationFailed, match="no access token"):
            await authenticator.authenticate(client)
        await client.aclose()
