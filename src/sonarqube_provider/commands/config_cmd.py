"""Config commands: server profiles used to reach SonarQube."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from sonarqube_provider.client.errors import error_handler
from sonarqube_provider.commands._common import FormatOpt
from sonarqube_provider.config.manager import ConfigManager
from sonarqube_provider.config.models import ServerProfile
from sonarqube_provider.output.formatter import output

app = typer.Typer(name="config", help="Manage SonarQube server profiles.")
console = Console()

NameArg = Annotated[str, typer.Argument(help="Profile name")]
PROFILE_COLUMNS = ["Name", "URL", "Auth", "Default"]


def _get_manager() -> ConfigManager:
    return ConfigManager()


@app.command()
@error_handler
def add(
    name: NameArg,
    url: Annotated[str, typer.Option("--url", "-u", help="Server URL")],
    token: Annotated[Optional[str], typer.Option("--token", "-t", help="User token")] = None,
    username: Annotated[Optional[str], typer.Option("--username", help="Basic auth username")] = None,
    password: Annotated[Optional[str], typer.Option("--password", help="Basic auth password")] = None,
    no_verify_ssl: Annotated[bool, typer.Option("--no-verify-ssl", help="Disable SSL verification")] = False,
    timeout: Annotated[float, typer.Option("--timeout", help="Request timeout in seconds")] = 30.0,
    make_default: Annotated[bool, typer.Option("--default", help="Make this the default profile")] = False,
) -> None:
    """Add or overwrite a server profile."""
    mgr = _get_manager()
    mgr.add_profile(
        ServerProfile(
            name=name,
            url=url,
            token=token,
            username=username,
            password=password,
            verify_ssl=not no_verify_ssl,
            timeout=timeout,
        ),
        make_default=make_default,
    )
    console.print(f"[green]Profile '{name}' added to {mgr.config_path}.[/]")


@app.command("list")
@error_handler
def list_profiles(fmt: FormatOpt = "table") -> None:
    """List configured profiles; tokens and passwords are masked."""
    cfg = _get_manager().config
    if not cfg.profiles:
        console.print("[yellow]No profiles configured. Run 'sonarqube-provider config add'.[/]")
        return
    rows = [
        [name, p.url, p.auth_method, "*" if name == cfg.default_profile else ""]
        for name, p in cfg.profiles.items()
    ]
    data = {"profiles": [p.redacted() for p in cfg.profiles.values()]}
    output(data, fmt, columns=PROFILE_COLUMNS, rows=rows, title="Server Profiles")


@app.command()
@error_handler
def show(name: NameArg, fmt: FormatOpt = "table") -> None:
    """Show one profile with secrets masked."""
    profile = _get_manager().require_profile(name)
    output(profile.redacted(), fmt, title=f"Profile: {name}")


@app.command("set-default")
@error_handler
def set_default(name: NameArg) -> None:
    """Use NAME when no --profile is given."""
    _get_manager().set_default(name)
    console.print(f"[green]Default profile set to '{name}'.[/]")


@app.command()
@error_handler
def test(
    name: Annotated[Optional[str], typer.Argument(help="Profile name (uses default if omitted)")] = None,
) -> None:
    """Call api/system/status to check the server is reachable."""
    from sonarqube_provider.client.server import SonarQubeClient

    profile = _get_manager().resolve_server(profile_name=name)
    console.print(f"Testing connection to [bold]{profile.url}[/]...")
    with SonarQubeClient(profile) as client:
        info = client.get("api/system/status").json()
    console.print(
        f"[green]Connected![/] SonarQube {info.get('version', '?')}"
        f" ({info.get('status', 'UNKNOWN')})"
    )


@app.command()
@error_handler
def remove(
    name: NameArg,
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Delete a server profile."""
    if not force and not Confirm.ask(f"Remove profile '{name}'?"):
        console.print("Cancelled.")
        return
    _get_manager().remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")
