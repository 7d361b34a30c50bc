"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "sonarqube-provider"
APP_AUTHOR = "sonarqube-provider"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_SERVER_URL = "SONARQUBE_URL"
ENV_TOKEN = "SONARQUBE_TOKEN"
ENV_PROFILE = "SONARQUBE_PROFILE"
ENV_STATE_FILE = "SONARQUBE_STATE_FILE"
ENV_LOG_LEVEL = "SONARQUBE_LOG_LEVEL"

# API defaults
DEFAULT_TIMEOUT = 30.0
DEFAULT_STATE_FILE = "sonarqube.tfstate.json"
DEFAULT_LOG_LEVEL = "WARNING"
