"""Configuration loading and saving."""

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from modelrouter.config.schema import RouterSettings
from modelrouter.errors import ConfigError


def get_config_path() -> Path:
    """Default configuration file location."""
    return Path.home() / ".modelrouter" / "config.json"


def load_config(path: Path | str | None = None) -> RouterSettings:
    """
    Load settings from a JSON file.

    Environment variables (MODELROUTER_*) still apply to fields the file
    does not set. A missing file yields the defaults.

    Args:
        path: Config file path, or None for the default location.

    Returns:
        Validated RouterSettings.

    Raises:
        ConfigError: If the file exists but cannot be parsed or validated.
    """
    config_path = Path(path).expanduser() if path else get_config_path()

    if not config_path.exists():
        logger.debug(f"No config at {config_path}, using defaults")
        return RouterSettings()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a JSON object")

    try:
        settings = RouterSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    logger.debug(f"Loaded config from {config_path}")
    return settings


def save_config(settings: RouterSettings, path: Path | str | None = None) -> Path:
    """Write settings as JSON and return the path written."""
    config_path = Path(path).expanduser() if path else get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(settings.model_dump(mode="json"), f, indent=2)

    logger.debug(f"Saved config to {config_path}")
    return config_path
