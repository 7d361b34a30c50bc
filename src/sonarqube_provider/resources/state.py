"""Local state record of one resource instance."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


class ResourceState(BaseModel):
    """Mutable record of a resource instance.

    ``id`` is empty while the resource is absent; once created it holds
    the remote project key.
    """

    id: str = ""
    name: str = ""
    project: str = ""
    visibility: str = "public"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> ResourceState:
        return cls(**{k: v for k, v in config.items() if v is not None})

    @property
    def is_present(self) -> bool:
        return bool(self.id)

    def set_id(self, value: str) -> None:
        self.id = value

    def clear_id(self) -> None:
        self.id = ""

    def attributes(self) -> dict[str, Any]:
        """Configuration fields, without the identifier."""
        return self.model_dump(exclude={"id"})
