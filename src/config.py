"""Configuration loader for the Ownable reference model

All configurable values come from config/config.yaml.

Configuration is validated at load time using Pydantic.
Typos and invalid values fail fast with clear error messages.

Usage:
    from src.config import load_config, get, get_validated_config

    # Load and validate (call once at startup)
    load_config("config/config.yaml")

    # Get values by dot-path
    recent = get("events.default_recent")

    # Or use the typed config object (preferred)
    config = get_validated_config()
    recent = config.events.default_recent
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .config_schema import AppConfig, load_validated_config, validate_config_dict


# Global config instances
_config: dict[str, Any] | None = None
_validated_config: AppConfig | None = None

# Default config path
DEFAULT_CONFIG_PATH: Path = Path(__file__).parent.parent / "config" / "config.yaml"


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config file. Defaults to config/config.yaml.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    global _config, _validated_config

    path: Path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _validated_config = load_validated_config(path)

    with open(path) as f:
        loaded: Any = yaml.safe_load(f)
        if not isinstance(loaded, dict):
            loaded = {}
        _config = loaded

    return _config


def reset_config() -> None:
    """Forget the loaded configuration so the next access reloads it."""
    global _config, _validated_config
    _config = None
    _validated_config = None


def get_config() -> dict[str, Any]:
    """Get the loaded configuration dict. Loads default if not already loaded.

    For typed access, use get_validated_config() instead.
    """
    global _config
    if _config is None:
        load_config()
    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")
    return _config


def get_validated_config() -> AppConfig:
    """Get the validated configuration object.

    Loads default config if not already loaded.
    """
    global _validated_config
    if _validated_config is None:
        load_config()
    if _validated_config is None:
        raise RuntimeError("Validated config failed to load. Call load_config() first.")
    return _validated_config


def get(key: str, default: Any = None) -> Any:
    """Get a config value by dot-separated key path.

    Examples:
        get("events.default_recent")
        get("logging.level")
    """
    config: dict[str, Any] = get_config()
    keys: list[str] = key.split(".")

    value: Any = config
    for k in keys:
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value


def set_config_value(key: str, value: Any) -> None:
    """Set a config value by dot-separated key path.

    Used for runtime overrides (e.g., CLI args). The whole config is
    re-validated afterwards.

    Args:
        key: Dot-separated key path (e.g., "events.output_file")
        value: Value to set
    """
    global _config, _validated_config

    if _config is None:
        load_config()

    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")

    keys = key.split(".")
    target = _config

    # Navigate to parent
    for k in keys[:-1]:
        if k not in target or target[k] is None:
            target[k] = {}
        target = target[k]

    target[keys[-1]] = value

    _validated_config = validate_config_dict(_config)


def configure_logging() -> None:
    """Apply the logging section of the config to the root logger."""
    cfg = get_validated_config().logging
    root = logging.getLogger()
    root.setLevel(cfg.level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(cfg.format))
        root.addHandler(handler)
