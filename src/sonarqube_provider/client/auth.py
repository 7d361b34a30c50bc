"""Authentication strategies for the SonarQube web API."""

from __future__ import annotations

import httpx

from sonarqube_provider.config.models import ServerProfile


class TokenAuth(httpx.BasicAuth):
    """Authenticate with a SonarQube user token.

    The token goes in the Basic auth username with an empty password,
    which every SonarQube version accepts.
    """

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(token, "")


class BasicAuth(httpx.BasicAuth):
    """HTTP Basic auth wrapper."""


def resolve_auth(profile: ServerProfile) -> httpx.Auth | None:
    """Resolve authentication from a server profile."""
    if profile.token:
        return TokenAuth(profile.token)
    if profile.username and profile.password:
        return BasicAuth(profile.username, profile.password)
    return None
