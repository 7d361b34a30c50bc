"""Output dispatcher: renders state records as a table, JSON, or YAML."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import yaml
from rich.console import Console

from sonarqube_provider.output.tables import kv_table, make_table

console = Console()

FORMATS = ("table", "json", "yaml")


def _plain(data: Any) -> Any:
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if isinstance(data, dict):
        return {k: _plain(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_plain(v) for v in data]
    return data


def output_json(data: Any) -> None:
    """Print data as formatted JSON."""
    console.print_json(json.dumps(_plain(data), indent=2, default=str))


def output_yaml(data: Any) -> None:
    """Print data as YAML."""
    console.print(
        yaml.safe_dump(_plain(data), default_flow_style=False, sort_keys=False),
        end="",
    )


def output(
    data: Any,
    fmt: str = "table",
    *,
    columns: Sequence[str] | None = None,
    rows: Sequence[Sequence[Any]] | None = None,
    title: str | None = None,
) -> None:
    """Dispatch output to the appropriate formatter.

    Tables use *columns*/*rows* when given, otherwise a dict is shown as
    key/value pairs.
    """
    if fmt == "json":
        output_json(data)
    elif fmt == "yaml":
        output_yaml(data)
    elif fmt != "table":
        raise ValueError(f"Unknown output format '{fmt}', expected one of {', '.join(FORMATS)}")
    elif columns and rows is not None:
        console.print(make_table(title, columns, rows))
    else:
        console.print(kv_table(_plain(data), title=title))
