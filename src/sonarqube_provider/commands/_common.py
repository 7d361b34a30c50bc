"""Shared helpers for CLI commands: client factory, options, state rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from sonarqube_provider.client.server import SonarQubeClient
from sonarqube_provider.config.manager import ConfigManager
from sonarqube_provider.resources.state import ResourceState
from sonarqube_provider.state.store import StateStore

# Shared Typer option type aliases
ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-p", help="Server profile"),
]
UrlOpt = Annotated[
    str | None,
    typer.Option("--url", help="SonarQube URL override"),
]
TokenOpt = Annotated[
    str | None,
    typer.Option("--token", help="User token override"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format (table, json, yaml)"),
]
StateOpt = Annotated[
    Path | None,
    typer.Option("--state", help="State file path"),
]


def make_client(
    profile: str | None,
    url: str | None,
    token: str | None,
) -> SonarQubeClient:
    """Create a SonarQubeClient from CLI options, env vars, or config profile."""
    mgr = ConfigManager()
    resolved = mgr.resolve_server(profile_name=profile, url=url, token=token)
    return SonarQubeClient(resolved)


def make_store(path: Path | None) -> StateStore:
    return StateStore(path)


def state_row(address: str, state: ResourceState) -> list[str]:
    return [address, state.id, state.name, state.project, state.visibility]
