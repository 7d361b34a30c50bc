"""SonarQube HTTP client."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from sonarqube_provider.client.auth import resolve_auth
from sonarqube_provider.client.errors import (
    DecodeError,
    TransportError,
    error_for_status,
)
from sonarqube_provider.config.models import ServerProfile

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class SonarQubeClient:
    """Synchronous HTTP client for the SonarQube web API.

    The base URL never changes after construction. Each request is
    resolved from it with a relative path and its own query parameters,
    so one client can be shared between resource instances.
    """

    def __init__(
        self,
        profile: ServerProfile,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.profile = profile
        self.base_url = f"{profile.url}/"
        if not profile.verify_ssl:
            logger.warning("TLS certificate verification is disabled for %s", profile.url)
        self._client = httpx.Client(
            base_url=self.base_url,
            auth=resolve_auth(profile),
            verify=profile.verify_ssl,
            timeout=profile.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> SonarQubeClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        expected_status: int = 200,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and check its status.

        Any status other than *expected_status* raises a RemoteError
        subclass whose message is the response body as text.
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self._client.request(method, path, params=params)
        except httpx.ConnectError as exc:
            raise TransportError(
                f"Cannot connect to SonarQube at {self.profile.url}: {exc}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request to {self.profile.url} timed out: {exc}"
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise TransportError(
                f"Invalid URL for SonarQube at {self.profile.url}: {exc}"
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(
                f"Request to {self.profile.url} failed: {exc}"
            ) from exc
        logger.info(
            "Response from server: %s %s -> %d", method, path, response.status_code,
        )
        if response.status_code != expected_status:
            raise error_for_status(response.status_code, response.text)
        return response

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    @staticmethod
    def decode(response: httpx.Response, model: type[M]) -> M:
        """Validate a JSON response body against *model*."""
        try:
            return model.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(
                f"Cannot decode response from {response.request.url}: {exc}"
            ) from exc
