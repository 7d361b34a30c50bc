"""E2E test configuration: live server options."""

from __future__ import annotations

import pytest


@pytest.fixture
def sonar_opts(request):
    url = request.config.getoption("--sonar-url")
    token = request.config.getoption("--sonar-token")
    if not url or not token:
        pytest.skip("Live SonarQube credentials not provided")
    return ["--url", url, "--token", token]
