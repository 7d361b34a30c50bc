"""Integration tests for config commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import httpx
import respx
from typer.testing import CliRunner

from sonarqube_provider.app import app
from sonarqube_provider.config.manager import ConfigManager

runner = CliRunner()


def _patch_manager(tmp_path: Path):
    """Patch ConfigManager to use a temp config file."""
    config_path = tmp_path / "config.toml"
    return patch(
        "sonarqube_provider.commands.config_cmd._get_manager",
        return_value=ConfigManager(config_path=config_path),
    )


class TestConfigCommands:
    def test_list_empty(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, ["config", "list"])
            assert result.exit_code == 0
            assert "No profiles configured" in result.output

    def test_add_and_list(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, ["config", "add", "dev", "--url", "https://sonar:9000", "--token", "squ_x"])
            assert result.exit_code == 0
            assert "added" in result.output

            result = runner.invoke(app, ["config", "list"])
            assert result.exit_code == 0
            assert "dev" in result.output

    def test_add_invalid_url(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, ["config", "add", "dev", "--url", "sonar:9000"])
            assert result.exit_code == 1

    def test_show_masks_token(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "dev", "--url", "https://sonar:9000", "--token", "squ_longsecrettoken"])
            result = runner.invoke(app, ["config", "show", "dev"])
            assert result.exit_code == 0
            assert "dev" in result.output
            assert "squ_longsecrettoken" not in result.output

    def test_show_nonexistent(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, ["config", "show", "nope"])
            assert result.exit_code == 6

    def test_set_default(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "a", "--url", "https://a:9000"])
            runner.invoke(app, ["config", "add", "b", "--url", "https://b:9000"])
            result = runner.invoke(app, ["config", "set-default", "b"])
            assert result.exit_code == 0
            assert "b" in result.output

    def test_add_with_default_flag(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "a", "--url", "https://a:9000"])
            runner.invoke(app, ["config", "add", "b", "--url", "https://b:9000", "--default"])
            result = runner.invoke(app, ["config", "list"])
            assert result.exit_code == 0
            assert ConfigManager(config_path=tmp_path / "config.toml").config.default_profile == "b"

    def test_remove_profile(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "dev", "--url", "https://sonar:9000"])
            result = runner.invoke(app, ["config", "remove", "dev", "--force"])
            assert result.exit_code == 0
            assert "removed" in result.output

    def test_remove_nonexistent(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            result = runner.invoke(app, ["config", "remove", "nope", "--force"])
            assert result.exit_code == 6

    def test_list_json_format(self, tmp_path: Path):
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "dev", "--url", "https://sonar:9000", "--token", "squ_x"])
            result = runner.invoke(app, ["config", "list", "--format", "json"])
            assert result.exit_code == 0
            assert "profiles" in result.output

    @respx.mock
    def test_connection(self, tmp_path: Path):
        respx.get("https://sonar:9000/api/system/status").mock(
            return_value=httpx.Response(200, json={"id": "x", "version": "10.4.1", "status": "UP"})
        )
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "dev", "--url", "https://sonar:9000", "--token", "squ_x"])
            result = runner.invoke(app, ["config", "test", "dev"])
            assert result.exit_code == 0
            assert "10.4.1" in result.output

    @respx.mock
    def test_connection_refused(self, tmp_path: Path):
        respx.get("https://sonar:9000/api/system/status").mock(
            side_effect=httpx.ConnectError("refused")
        )
        with _patch_manager(tmp_path):
            runner.invoke(app, ["config", "add", "dev", "--url", "https://sonar:9000"])
            result = runner.invoke(app, ["config", "test", "dev"])
            assert result.exit_code == 2
