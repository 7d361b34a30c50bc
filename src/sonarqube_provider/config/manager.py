"""Server profiles on disk and connection resolution."""

from __future__ import annotations

import os
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from sonarqube_provider.client.errors import ConfigurationError
from sonarqube_provider.config.constants import (
    CONFIG_FILE,
    ENV_PROFILE,
    ENV_SERVER_URL,
    ENV_TOKEN,
)
from sonarqube_provider.config.models import ProviderConfig, ServerProfile

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib


class ConfigManager:
    """Loads the profile file lazily and writes it back on every change."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: ProviderConfig | None = None

    @property
    def config(self) -> ProviderConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> ProviderConfig:
        if not self.config_path.exists():
            return ProviderConfig()
        try:
            with self.config_path.open("rb") as fh:
                return ProviderConfig.from_toml(tomllib.load(fh))
        except (tomllib.TOMLDecodeError, ValidationError) as exc:
            raise ConfigurationError(
                f"Cannot parse config file {self.config_path}: {exc}"
            ) from exc

    def save(self) -> None:
        directory = self.config_path.parent
        directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        # Profiles hold tokens: the file is never readable by others
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(temp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as fh:
            tomli_w.dump(self.config.to_toml(), fh)
        temp.replace(self.config_path)

    def require_profile(self, name: str) -> ServerProfile:
        profile = self.config.profiles.get(name)
        if profile is None:
            raise ConfigurationError(f"Profile '{name}' not found in {self.config_path}")
        return profile

    def add_profile(self, profile: ServerProfile, make_default: bool = False) -> None:
        """Store *profile*; the first profile added becomes the default."""
        self.config.profiles[profile.name] = profile
        if make_default or not self.config.default_profile:
            self.config.default_profile = profile.name
        self.save()

    def remove_profile(self, name: str) -> None:
        self.require_profile(name)
        del self.config.profiles[name]
        if self.config.default_profile == name:
            self.config.default_profile = next(iter(self.config.profiles), None)
        self.save()

    def set_default(self, name: str) -> None:
        self.require_profile(name)
        self.config.default_profile = name
        self.save()

    def get_profile(self, name: str | None = None) -> ServerProfile | None:
        """Named profile, or the default one when *name* is empty."""
        name = name or self.config.default_profile
        return self.config.profiles.get(name) if name else None

    def resolve_server(
        self,
        profile_name: str | None = None,
        url: str | None = None,
        token: str | None = None,
    ) -> ServerProfile:
        """Resolve the server connection.

        Precedence: CLI flags > env vars > config profile. Naming a
        profile that does not exist is an error rather than a fallback.
        """
        name = profile_name or os.environ.get(ENV_PROFILE)
        profile = self.require_profile(name) if name else self.get_profile()
        url = url or os.environ.get(ENV_SERVER_URL)
        token = token or os.environ.get(ENV_TOKEN)

        if profile is not None:
            return profile.with_overrides(url=url, token=token)
        if not url:
            raise ConfigurationError(
                "No SonarQube URL configured. Use 'sonarqube-provider config add', "
                f"set {ENV_SERVER_URL} or pass --url."
            )
        return ServerProfile(name="cli", url=url, token=token)
