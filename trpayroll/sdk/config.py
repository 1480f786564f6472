"""Configuration management for tr-payroll.

Settings are resolved per key in this order:

1. Environment variables (PAYROLLA_API_URL, PAYROLLA_TIMEOUT, ...)
2. settings.json in the config directory
3. Built-in defaults

The API key is only read from PAYROLLA_API_KEY and is never written to disk.

Config directory resolution:
1. TR_PAYROLL_CONFIG_PATH environment variable (if set)
2. ~/.config/tr-payroll/ (XDG_CONFIG_HOME fallback)
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigError, MissingCredentialError


APP_NAME = "tr-payroll"
SETTINGS_FILENAME = "settings.json"

API_KEY_ENV = "PAYROLLA_API_KEY"
DEFAULT_API_URL = "https://api.payrolla.app"
DEFAULT_TIMEOUT = 30.0
DEFAULT_REQUEST_TIMEOUT = 600.0

# setting key -> environment variable
_ENV_OVERRIDES = {
    "api_url": "PAYROLLA_API_URL",
    "timeout": "PAYROLLA_TIMEOUT",
    "request_timeout": "PAYROLLA_REQUEST_TIMEOUT",
    "debug": "PAYROLLA_DEBUG",
}


class EngineSettings(BaseModel):
    """Resolved settings for talking to the calculation engine."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    api_key: Optional[str] = Field(default=None, repr=False, description="Engine API key")
    api_url: str = Field(default=DEFAULT_API_URL, description="Engine base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, description="Per-call timeout in seconds")
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        description="Deadline for a whole tool invocation in seconds",
    )
    debug: bool = Field(default=False, description="Verbose logging to stderr")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TR_PAYROLL_CONFIG_PATH environment variable
    2. ~/.config/tr-payroll/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TR_PAYROLL_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigError: If the file exists but is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigError(f"{settings_file} must contain a JSON object")
    return settings


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value, environment first, then settings.json.

    Args:
        key: Setting key (e.g., "api_url", "timeout")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    env_var = _ENV_OVERRIDES.get(key)
    if env_var and os.environ.get(env_var):
        return os.environ[env_var]
    return load_settings().get(key, default)


def _as_seconds(key: str, value: Any) -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key} must be a number of seconds, got {value!r}") from e
    if seconds <= 0:
        raise ConfigError(f"{key} must be positive, got {value!r}")
    return seconds


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_engine_settings() -> EngineSettings:
    """Resolve engine settings from environment, settings.json and defaults.

    The API key may be missing here; use require_api_key() where it is mandatory.

    Raises:
        ConfigError: If a timeout is not a positive number
    """
    return EngineSettings(
        api_key=os.environ.get(API_KEY_ENV) or None,
        api_url=str(get_setting("api_url", DEFAULT_API_URL)).rstrip("/"),
        timeout=_as_seconds("timeout", get_setting("timeout", DEFAULT_TIMEOUT)),
        request_timeout=_as_seconds(
            "request_timeout", get_setting("request_timeout", DEFAULT_REQUEST_TIMEOUT)
        ),
        debug=_as_bool(get_setting("debug", False)),
    )


def require_api_key(settings: EngineSettings) -> str:
    """Return the API key or raise MissingCredentialError."""
    if not settings.api_key:
        raise MissingCredentialError(f"{API_KEY_ENV} environment variable is required")
    return settings.api_key


def configure_logging(debug: bool = False) -> None:
    """Send log output to stderr.

    stdout carries the MCP JSON-RPC stream, so nothing may log there.
    Level comes from LOG_LEVEL (default INFO); debug forces DEBUG.
    """
    level_name = "DEBUG" if debug else os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
