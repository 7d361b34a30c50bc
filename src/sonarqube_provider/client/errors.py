"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console
from rich.markup import escape

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class SonarQubeProviderError(Exception):
    """Base exception for sonarqube-provider."""

    exit_code: int = 1


class TransportError(SonarQubeProviderError):
    """The request never produced a response (connect, timeout, bad URL)."""

    exit_code = 2


class RemoteError(SonarQubeProviderError):
    """The server answered with an unexpected status.

    The message is the raw response body, unchanged.
    """

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(body)


class AuthenticationError(RemoteError):
    """Authentication failed (401/403)."""

    exit_code = 3


class NotFoundError(RemoteError):
    """Project not found (404, or missing on import)."""

    exit_code = 4


class ConflictError(RemoteError):
    """Resource conflict (409)."""

    exit_code = 5


class ConfigurationError(SonarQubeProviderError):
    """Provider or resource configuration is missing or invalid."""

    exit_code = 6


class DecodeError(SonarQubeProviderError):
    """A success response carried a body that could not be decoded."""

    exit_code = 7


class StateError(SonarQubeProviderError):
    """The local state file is unreadable or incompatible."""

    exit_code = 8


def error_for_status(status_code: int, body: str) -> RemoteError:
    """Pick the RemoteError subclass matching *status_code*."""
    if status_code in (401, 403):
        return AuthenticationError(status_code, body)
    if status_code == 404:
        return NotFoundError(status_code, body)
    if status_code == 409:
        return ConflictError(status_code, body)
    return RemoteError(status_code, body)


def error_handler(func: F) -> F:
    """Decorator that catches SonarQubeProviderError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SonarQubeProviderError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
