"""Configuration loading utilities."""

import json
from pathlib import Path

from loguru import logger

from wolsearch.config.schema import Config


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".wolsearch" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object.
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            data = _migrate_config(data)
            return Config.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning("Failed to load config from {}: {}", path, e)
            logger.warning("Using default configuration.")

    return Config()


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.

    Returns:
        The path that was written.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(by_alias=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


def _migrate_config(data: dict) -> dict:
    """Migrate old config formats to current."""
    if not isinstance(data, dict):
        raise ValueError("config root must be an object")

    # Move legacy "WOL" section with PascalCase keys -> "wol" with camelCase keys
    legacy_wol = data.pop("WOL", None)
    if isinstance(legacy_wol, dict):
        wol_cfg = _section(data, "wol")
        for key, value in legacy_wol.items():
            wol_cfg.setdefault(_pascal_to_camel(key), value)

    # Move legacy "Logging.LogLevel.Default" -> logging.level
    legacy_logging = data.pop("Logging", None)
    if isinstance(legacy_logging, dict):
        log_levels = legacy_logging.get("LogLevel")
        level = log_levels.get("Default") if isinstance(log_levels, dict) else None
        if level:
            _section(data, "logging").setdefault("level", _normalize_level(level))

    return data


def _section(data: dict, key: str) -> dict:
    if data.get(key) is None:
        data[key] = {}
    section = data[key]
    if not isinstance(section, dict):
        raise ValueError(f"{key} must be an object")
    return section


def _pascal_to_camel(name: str) -> str:
    return name[:1].lower() + name[1:] if name else name


def _normalize_level(level: str) -> str:
    mapping = {
        "trace": "TRACE",
        "debug": "DEBUG",
        "information": "INFO",
        "warning": "WARNING",
        "error": "ERROR",
        "critical": "CRITICAL",
    }
    return mapping.get(str(level).lower(), str(level).upper())
