"""Field descriptors for resource configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sonarqube_provider.client.errors import ConfigurationError


@dataclass(frozen=True)
class FieldSchema:
    """One configurable field of a resource."""

    name: str
    value_type: type = str
    required: bool = False
    default: Any = None
    force_new: bool = False
    choices: tuple[str, ...] | None = None
    description: str | None = None

    @property
    def optional(self) -> bool:
        return not self.required


@dataclass(frozen=True)
class ResourceSchema:
    """The set of fields a resource type accepts."""

    type_name: str
    fields: tuple[FieldSchema, ...] = field(default_factory=tuple)

    def get_field(self, name: str) -> FieldSchema:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def apply_defaults(self, config: Mapping[str, Any]) -> dict[str, Any]:
        """Return a copy of *config* with defaults for missing optional fields."""
        result = dict(config)
        for f in self.fields:
            if f.optional and result.get(f.name) is None and f.default is not None:
                result[f.name] = f.default
        return result

    def validate_config(self, config: Mapping[str, Any]) -> None:
        """Raise ConfigurationError when *config* does not fit the schema."""
        unknown = sorted(set(config) - set(self.field_names))
        if unknown:
            raise ConfigurationError(
                f"{self.type_name}: unknown field(s): {', '.join(unknown)}"
            )
        for f in self.fields:
            value = config.get(f.name)
            if value is None:
                if f.required:
                    raise ConfigurationError(
                        f"{self.type_name}: field '{f.name}' is required"
                    )
                continue
            if not isinstance(value, f.value_type):
                raise ConfigurationError(
                    f"{self.type_name}: field '{f.name}' must be of type {f.value_type.__name__}"
                )
            if f.required and value == "":
                raise ConfigurationError(
                    f"{self.type_name}: field '{f.name}' must not be empty"
                )
            if f.choices is not None and value not in f.choices:
                raise ConfigurationError(
                    f"{self.type_name}: field '{f.name}' must be one of "
                    f"{', '.join(f.choices)}, got '{value}'"
                )

    def replacement_fields(
        self, prior: Mapping[str, Any], desired: Mapping[str, Any],
    ) -> list[str]:
        """Names of force-new fields whose value differs between *prior* and *desired*."""
        return [
            f.name
            for f in self.fields
            if f.force_new and prior.get(f.name) != desired.get(f.name)
        ]
