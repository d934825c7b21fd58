"""Pydantic schema for configuration validation.

All config values are validated at load time. Typos and invalid values
fail fast with clear error messages.

Usage:
    from config_schema import load_validated_config, AppConfig
    config = load_validated_config("config/config.yaml")
    # config is now a validated AppConfig instance
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# BASE MODEL WITH STRICT VALIDATION
# =============================================================================

class StrictModel(BaseModel):
    """Base model that rejects unknown fields (catches typos)."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# LOGGING MODEL
# =============================================================================

class LoggingConfig(StrictModel):
    """Python logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level"
    )
    format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log record format string"
    )


# =============================================================================
# EVENTS MODEL
# =============================================================================

class EventsConfig(StrictModel):
    """OwnershipTransferred notification log configuration."""

    output_file: str | None = Field(
        default=None,
        description="JSONL file for persisted notifications (None = in-memory only)"
    )
    default_recent: int = Field(
        default=50,
        gt=0,
        description="Default number of recent events to return"
    )


# =============================================================================
# INTERFACES MODEL
# =============================================================================

class InterfacesConfig(StrictModel):
    """Capability discovery configuration."""

    extra: list[str] = Field(
        default_factory=list,
        description="Additional 4-byte interface ids (hex) every entity reports as supported"
    )

    @field_validator("extra")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        # Imported here: the ownership package imports config at load time.
        from .ownership.interfaces import INVALID_INTERFACE_ID, normalize_interface_id

        for tag in v:
            # InvalidInterfaceIdError is a ValueError, so pydantic reports it.
            if normalize_interface_id(tag) == INVALID_INTERFACE_ID:
                raise ValueError("0xffffffff is reserved and cannot be supported")
        return v


# =============================================================================
# ROOT CONFIG MODEL
# =============================================================================

class AppConfig(StrictModel):
    """Root configuration model.

    All fields have sensible defaults, so an empty config file is valid.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    interfaces: InterfacesConfig = Field(default_factory=InterfacesConfig)


# =============================================================================
# LOADING FUNCTIONS
# =============================================================================

def load_validated_config(config_path: str | Path = "config/config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid (with detailed error message).
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw_config)


def validate_config_dict(config_dict: dict[str, Any]) -> AppConfig:
    """Validate a configuration dictionary.

    Raises:
        pydantic.ValidationError: If config is invalid.
    """
    return AppConfig.model_validate(config_dict)
