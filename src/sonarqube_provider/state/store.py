"""JSON state file: one record per resource address."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from sonarqube_provider.client.errors import StateError
from sonarqube_provider.config.constants import DEFAULT_STATE_FILE, ENV_STATE_FILE
from sonarqube_provider.resources.state import ResourceState

STATE_VERSION = 1


def resource_address(resource_type: str, label: str) -> str:
    return f"{resource_type}.{label}"


class StateStore:
    """Reads and writes resource states keyed by address.

    Layout: ``{"version": 1, "resources": {"<address>": {...}}}``.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or Path(os.environ.get(ENV_STATE_FILE, DEFAULT_STATE_FILE))
        self._resources: dict[str, ResourceState] | None = None

    @property
    def resources(self) -> dict[str, ResourceState]:
        if self._resources is None:
            self._resources = self._load()
        return self._resources

    def _load(self) -> dict[str, ResourceState]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise StateError(f"Cannot read state file {self.path}: {exc}") from exc
        if not isinstance(data, dict) or data.get("version") != STATE_VERSION:
            raise StateError(
                f"Unsupported state file version in {self.path}: "
                f"{data.get('version') if isinstance(data, dict) else data!r}"
            )
        try:
            return {
                address: ResourceState.model_validate(record)
                for address, record in data.get("resources", {}).items()
            }
        except ValidationError as exc:
            raise StateError(f"Corrupt record in state file {self.path}: {exc}") from exc

    def save(self) -> None:
        data: dict[str, Any] = {
            "version": STATE_VERSION,
            "resources": {
                address: state.model_dump()
                for address, state in sorted(self.resources.items())
            },
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Atomic write: write to temp file, then rename
        temp = self.path.with_suffix(self.path.suffix + ".tmp")
        temp.write_text(json.dumps(data, indent=2) + "\n")
        temp.replace(self.path)

    def get(self, address: str) -> ResourceState | None:
        state = self.resources.get(address)
        return state.model_copy() if state is not None else None

    def put(self, address: str, state: ResourceState) -> None:
        self.resources[address] = state.model_copy()
        self.save()

    def remove(self, address: str) -> bool:
        if address not in self.resources:
            return False
        del self.resources[address]
        self.save()
        return True

    def addresses(self) -> list[str]:
        return sorted(self.resources)
