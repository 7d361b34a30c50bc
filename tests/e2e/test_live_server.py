"""End-to-end lifecycle against a live SonarQube server.

Skipped unless credentials are provided. Run with:
    pytest -m e2e --sonar-url=http://localhost:9000 --sonar-token=squ_...

WARNING: creates and deletes a real project. Use a throwaway server.
"""

from __future__ import annotations

import json
import uuid
from pathlib import Path

import pytest
from typer.testing import CliRunner

from sonarqube_provider.app import app

runner = CliRunner()

pytestmark = pytest.mark.e2e


def invoke(args: list[str], sonar_opts: list[str]):
    result = runner.invoke(app, [*args, *sonar_opts])
    assert result.exit_code == 0, (
        f"Command failed: {' '.join(args)}\n"
        f"Exit code: {result.exit_code}\n"
        f"Output: {result.output}"
    )
    return result


def test_project_lifecycle(sonar_opts: list[str], tmp_path: Path):
    key = f"e2e-test-{uuid.uuid4().hex[:8]}"
    state = ["--state", str(tmp_path / "state.json")]
    address = "sonarqube_project.e2e"

    invoke(["project", "apply", "e2e", "-n", "E2E", "-k", key, *state], sonar_opts)
    try:
        invoke(["project", "refresh", "e2e", *state], sonar_opts)
        stored = json.loads((tmp_path / "state.json").read_text())["resources"][address]
        assert stored["id"] == key
        assert stored["visibility"] == "public"

        invoke([
            "project", "apply", "e2e", "-n", "E2E", "-k", key,
            "--visibility", "private", "--auto-approve", *state,
        ], sonar_opts)
        stored = json.loads((tmp_path / "state.json").read_text())["resources"][address]
        assert stored["visibility"] == "private"
    finally:
        invoke(["project", "destroy", "e2e", "--force", *state], sonar_opts)

    result = runner.invoke(app, ["project", "import", "again", key, *state, *sonar_opts])
    assert result.exit_code == 4
