"""Configuration module for wolsearch."""

from wolsearch.config.loader import get_config_path, load_config, save_config
from wolsearch.config.schema import Config, LoggingConfig, WolConfig

__all__ = [
    "Config",
    "LoggingConfig",
    "WolConfig",
    "get_config_path",
    "load_config",
    "save_config",
]
