"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "nxapi-cli"
APP_AUTHOR = "nxapi-cli"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_HOST = "NXAPI_HOST"
ENV_USERNAME = "NXAPI_USERNAME"
ENV_PASSWORD = "NXAPI_PASSWORD"
ENV_PROFILE = "NXAPI_PROFILE"
ENV_LOG_LEVEL = "NXAPI_LOG_LEVEL"

# API defaults
API_PATH = "/ins"
DEFAULT_PROTOCOL = "https"
DEFAULT_TIMEOUT = 30.0
DEFAULT_PORTS = {"http": 80, "https": 443}
