"""Root Typer app: global options and command group registration."""

from __future__ import annotations

from typing import Optional

import typer

from sonarqube_provider import __version__
from sonarqube_provider.commands import config_cmd, project
from sonarqube_provider.utils.logs import resolve_level, setup_logging

app = typer.Typer(
    name="sonarqube-provider",
    help="Manage SonarQube projects declaratively.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"sonarqube-provider {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """SonarQube provider: plan, apply, import and destroy projects."""
    setup_logging(resolve_level(verbose))


app.add_typer(config_cmd.app, name="config")
app.add_typer(project.app, name="project")


def main() -> None:
    app()
