"""Pydantic models for provider configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sonarqube_provider.config.constants import DEFAULT_TIMEOUT


class ServerProfile(BaseModel):
    """Connection settings for one SonarQube server.

    Either a user token or a username/password pair authenticates
    requests; with neither, requests go out anonymously.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    url: str = Field(description="Server base URL, e.g. https://sonar.example.com")
    token: str | None = Field(default=None, description="SonarQube user token")
    username: str | None = None
    password: str | None = None
    verify_ssl: bool = True
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, le=600)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @model_validator(mode="after")
    def check_basic_pair(self) -> ServerProfile:
        if (self.username is None) != (self.password is None):
            raise ValueError("username and password must be given together")
        return self

    @property
    def auth_method(self) -> str:
        if self.token:
            return "token"
        return "basic" if self.username else "none"

    def with_overrides(self, **overrides: str | None) -> ServerProfile:
        """Copy with every non-empty override applied and re-validated."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v})
        return ServerProfile.model_validate(data)

    def redacted(self) -> dict[str, Any]:
        data = self.model_dump(exclude_none=True)
        if "token" in data:
            data["token"] = data["token"][:4] + "..." if len(data["token"]) > 8 else "***"
        if "password" in data:
            data["password"] = "***"
        return data

    def to_toml(self) -> dict[str, Any]:
        """Table for the config file: name is the key, defaults are left out."""
        return self.model_dump(exclude={"name"}, exclude_defaults=True)


class ProviderConfig(BaseModel):
    """The whole config file: profiles keyed by name plus the default."""

    default_profile: str | None = None
    profiles: dict[str, ServerProfile] = Field(default_factory=dict)

    @classmethod
    def from_toml(cls, data: dict[str, Any]) -> ProviderConfig:
        return cls(
            default_profile=data.get("default_profile"),
            profiles={
                name: ServerProfile(name=name, **table)
                for name, table in data.get("profiles", {}).items()
            },
        )

    def to_toml(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.default_profile:
            data["default_profile"] = self.default_profile
        if self.profiles:
            data["profiles"] = {name: p.to_toml() for name, p in self.profiles.items()}
        return data
