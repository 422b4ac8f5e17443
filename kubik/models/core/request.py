"""Request description shared by plain and streaming API calls."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx


@dataclass(frozen=True)
class Credentials:
    """Username/password pair returned by the credential prompt."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class RequestSpec:
    """Method, path, query and headers of one API request.

    TLS material and the bearer credential live on the client; a spec only
    carries what differs between calls.
    """

    path: str
    method: str = "GET"
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    basic_auth: Credentials | None = None
    follow_redirects: bool = False

    def httpx_auth(self) -> httpx.Auth | None:
        if self.basic_auth is None:
            return None
        return httpx.BasicAuth(self.basic_auth.username, self.basic_auth.password)
