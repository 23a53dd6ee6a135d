"""Configuration for modelrouter."""

from modelrouter.config.schema import (
    CalibrationConfig,
    RouterSettings,
    SearchConfig,
    SearchProvidersConfig,
    TierThresholdsConfig,
)
from modelrouter.config.loader import get_config_path, load_config, save_config

__all__ = [
    "CalibrationConfig",
    "RouterSettings",
    "SearchConfig",
    "SearchProvidersConfig",
    "TierThresholdsConfig",
    "get_config_path",
    "load_config",
    "save_config",
]
