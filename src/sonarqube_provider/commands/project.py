"""Project commands.

plan, apply, refresh, import, destroy, show, list.
"""

from __future__ import annotations

from typing import Annotated, Any

import typer
from rich.console import Console

from sonarqube_provider.client.errors import error_handler
from sonarqube_provider.commands._common import (
    FormatOpt,
    ProfileOpt,
    StateOpt,
    TokenOpt,
    UrlOpt,
    make_client,
    make_store,
    state_row,
)
from sonarqube_provider.output.formatter import output
from sonarqube_provider.output.tables import STATE_COLUMNS
from sonarqube_provider.resources import lifecycle
from sonarqube_provider.resources.lifecycle import Action, PlannedChange
from sonarqube_provider.resources.project import (
    PROJECT_SCHEMA,
    RESOURCE_TYPE,
    ProjectResource,
)
from sonarqube_provider.resources.state import ResourceState
from sonarqube_provider.state.store import StateStore, resource_address

app = typer.Typer(name="project", help="Manage SonarQube projects as resources.")
console = Console()

LabelArg = Annotated[str, typer.Argument(help="Resource label, e.g. 'main'")]
NameOpt = Annotated[str, typer.Option("--name", "-n", help="Project display name")]
KeyOpt = Annotated[str, typer.Option("--project", "-k", help="Project key")]
VisibilityOpt = Annotated[
    str | None,
    typer.Option("--visibility", help="public or private (default: public)"),
]
RefreshOpt = Annotated[
    bool,
    typer.Option("--refresh/--no-refresh", help="Read the project from the server before planning"),
]

_ACTION_STYLE = {
    Action.CREATE: "[green]+ create[/]",
    Action.REPLACE: "[yellow]-/+ replace[/]",
    Action.DELETE: "[red]- destroy[/]",
    Action.NOOP: "[dim]no changes[/]",
}


def _desired(name: str, project: str, visibility: str | None) -> dict[str, Any]:
    return {"name": name, "project": project, "visibility": visibility}


def _print_plan(address: str, change: PlannedChange) -> None:
    console.print(f"{address}: {_ACTION_STYLE[change.action]}")
    if change.replace_fields and change.prior is not None and change.desired is not None:
        prior = change.prior.attributes()
        for field_name in change.replace_fields:
            console.print(
                f"  {field_name}: {prior.get(field_name)!r} -> "
                f"{change.desired.get(field_name)!r} (forces replacement)"
            )


def _current_prior(
    store: StateStore,
    address: str,
    connection: tuple[str | None, str | None, str | None],
    persist: bool,
) -> ResourceState | None:
    """Stored record for *address*, re-read from the server.

    A project deleted out of band yields None, so the plan recreates it.
    With *persist* the refreshed record (or its removal) is written back.
    """
    prior = store.get(address)
    if prior is None or not prior.is_present:
        return prior
    with make_client(*connection) as client:
        current = lifecycle.refresh(ProjectResource(client), prior)
    if current is None:
        console.print(f"[yellow]{address} no longer exists on the server.[/]")
        if persist:
            store.remove(address)
    elif persist:
        store.put(address, current)
    return current


@app.command()
@error_handler
def plan(
    label: LabelArg,
    name: NameOpt,
    project: KeyOpt,
    visibility: VisibilityOpt = None,
    refresh_state: RefreshOpt = True,
    state_file: StateOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
) -> None:
    """Show what apply would do; the state file is left untouched."""
    store = make_store(state_file)
    address = resource_address(RESOURCE_TYPE, label)
    prior = (
        _current_prior(store, address, (profile, url, token), persist=False)
        if refresh_state
        else store.get(address)
    )
    change = lifecycle.plan(PROJECT_SCHEMA, _desired(name, project, visibility), prior)
    _print_plan(address, change)


@app.command()
@error_handler
def apply(
    label: LabelArg,
    name: NameOpt,
    project: KeyOpt,
    visibility: VisibilityOpt = None,
    auto_approve: Annotated[
        bool,
        typer.Option("--auto-approve", help="Skip confirmation for replacements"),
    ] = False,
    refresh_state: RefreshOpt = True,
    state_file: StateOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
) -> None:
    """Create the project, or replace it when its configuration changed."""
    store = make_store(state_file)
    address = resource_address(RESOURCE_TYPE, label)
    prior = (
        _current_prior(store, address, (profile, url, token), persist=True)
        if refresh_state
        else store.get(address)
    )
    change = lifecycle.plan(PROJECT_SCHEMA, _desired(name, project, visibility), prior)
    _print_plan(address, change)
    if not change.has_changes:
        return
    if change.action is Action.REPLACE and not auto_approve:
        from rich.prompt import Confirm

        if not Confirm.ask(f"Replace {address}? The existing project is deleted first"):
            console.print("Cancelled.")
            return
    with make_client(profile, url, token) as client:
        state = lifecycle.apply(
            ProjectResource(client), change, on_delete=lambda: store.remove(address),
        )
    if state is not None:
        store.put(address, state)
        console.print(f"[green]{address} applied (id={state.id}).[/]")


@app.command()
@error_handler
def refresh(
    label: LabelArg,
    state_file: StateOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
) -> None:
    """Re-read the project from the server and update local state."""
    store = make_store(state_file)
    address = resource_address(RESOURCE_TYPE, label)
    prior = store.get(address)
    if prior is None:
        console.print(f"[red]{address} is not in the state file.[/]")
        raise typer.Exit(1)
    with make_client(profile, url, token) as client:
        state = lifecycle.refresh(ProjectResource(client), prior)
    if state is None:
        store.remove(address)
        console.print(f"[yellow]{address} no longer exists on the server; removed from state.[/]")
        return
    store.put(address, state)
    console.print(f"[green]{address} refreshed.[/]")


@app.command("import")
@error_handler
def import_project(
    label: LabelArg,
    key: Annotated[str, typer.Argument(help="Key of the existing project")],
    state_file: StateOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
) -> None:
    """Adopt an existing project into the state file."""
    store = make_store(state_file)
    address = resource_address(RESOURCE_TYPE, label)
    if store.get(address) is not None:
        console.print(f"[red]{address} is already managed; destroy or pick another label.[/]")
        raise typer.Exit(1)
    with make_client(profile, url, token) as client:
        (state,) = ProjectResource(client).import_state(key)
    store.put(address, state)
    console.print(f"[green]Imported '{key}' as {address}.[/]")


@app.command()
@error_handler
def destroy(
    label: LabelArg,
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
    state_file: StateOpt = None,
    profile: ProfileOpt = None,
    url: UrlOpt = None,
    token: TokenOpt = None,
) -> None:
    """Delete the project on the server and drop it from state."""
    store = make_store(state_file)
    address = resource_address(RESOURCE_TYPE, label)
    change = lifecycle.plan(PROJECT_SCHEMA, None, store.get(address))
    if not change.has_changes:
        console.print(f"[yellow]{address} is not in the state file.[/]")
        return
    if not force:
        from rich.prompt import Confirm

        if not Confirm.ask(f"Delete project '{change.prior.id}'? This cannot be undone"):  # type: ignore[union-attr]
            console.print("Cancelled.")
            return
    with make_client(profile, url, token) as client:
        lifecycle.apply(ProjectResource(client), change, on_delete=lambda: store.remove(address))
    console.print(f"[green]{address} destroyed.[/]")


@app.command()
@error_handler
def show(
    label: LabelArg,
    state_file: StateOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show the stored state of one project."""
    store = make_store(state_file)
    address = resource_address(RESOURCE_TYPE, label)
    state = store.get(address)
    if state is None:
        console.print(f"[red]{address} is not in the state file.[/]")
        raise typer.Exit(1)
    output(state, fmt, title=address)


@app.command("list")
@error_handler
def list_projects(
    state_file: StateOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List every project in the state file."""
    store = make_store(state_file)
    states = {a: s for a, s in store.resources.items() if a.startswith(f"{RESOURCE_TYPE}.")}
    if not states:
        console.print("[yellow]No projects in state.[/]")
        return
    rows = [state_row(a, s) for a, s in sorted(states.items())]
    output(states, fmt, columns=list(STATE_COLUMNS), rows=rows, title="Projects")
