"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from sonarqube_provider.client.server import SonarQubeClient
from sonarqube_provider.config.manager import ConfigManager
from sonarqube_provider.config.models import ServerProfile
from sonarqube_provider.resources.project import ProjectResource
from sonarqube_provider.state.store import StateStore

SONAR = "https://sonar:9000"


def pytest_addoption(parser):
    parser.addoption("--sonar-url", action="store", default=None)
    parser.addoption("--sonar-token", action="store", default=None)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "SONARQUBE_URL",
        "SONARQUBE_TOKEN",
        "SONARQUBE_PROFILE",
        "SONARQUBE_STATE_FILE",
        "SONARQUBE_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "sonarqube.tfstate.json"


@pytest.fixture
def state_store(state_path: Path) -> StateStore:
    return StateStore(state_path)


@pytest.fixture
def sample_profile() -> ServerProfile:
    """Return a sample server profile for testing."""
    return ServerProfile(
        name="test-sonar",
        url="https://localhost:9000",
        token="squ_testtoken",
    )


@pytest.fixture
def client() -> Iterator[SonarQubeClient]:
    profile = ServerProfile(name="test", url=SONAR, token="squ_token")
    with SonarQubeClient(profile) as c:
        yield c


@pytest.fixture
def project_resource(client: SonarQubeClient) -> ProjectResource:
    return ProjectResource(client)


@pytest.fixture
def demo_component() -> dict:
    """A project as returned by api/projects/search."""
    return {
        "key": "demo-key",
        "name": "Demo",
        "qualifier": "TRK",
        "visibility": "private",
        "lastAnalysisDate": "2024-05-01T10:00:00+0000",
    }
