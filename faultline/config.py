"""
Faultline — Configuration System

All configuration is Pydantic-validated and loaded from:
1. a YAML file (defaults for the deployment)
2. Environment variables (overrides)

Every tunable of the error pipeline lives here.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from faultline.primitives.common import Facility, Priority

# ─── Sub-configs ──────────────────────────────────────────────────


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "console"  # "console" | "json"


class ErrorsConfig(BaseModel):
    """How raised errors are rendered into log entries and routed."""

    log_prefix: str = "Exception: "
    default_facility: str = Facility.SYSTEM
    default_priority: str = Priority.ERROR
    caller_level: int = 1
    # Params key that collects the rendered text of child errors
    errval_key: str = "ERRVAL"
    # Last-resort stdlib logger used when no platform logger is reachable
    fallback_channel: str = "faultline.system"
    # Key under which the platform logger is registered in the context registry
    registry_log_key: str = "log"

    @field_validator("errval_key", "fallback_channel", "registry_log_key")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class I18nConfig(BaseModel):
    # YAML file mapping message codes to templates; empty disables translation
    catalog_path: str = ""
    locale: str = "en_US"


# ─── Root Configuration ──────────────────────────────────────────


class FaultlineConfig(BaseSettings):
    """
    Root configuration. Loads from YAML, overridable by env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="FAULTLINE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    errors: ErrorsConfig = Field(default_factory=ErrorsConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: str | Path | None = None) -> FaultlineConfig:
    """
    Load configuration from YAML file, then apply environment variable overrides.
    """
    raw: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}

    overrides: dict[str, Any] = {}
    if level := os.environ.get("FAULTLINE_LOG_LEVEL"):
        overrides.setdefault("logging", {})["level"] = level
    if catalog := os.environ.get("FAULTLINE_CATALOG"):
        overrides.setdefault("i18n", {})["catalog_path"] = catalog
    if channel := os.environ.get("FAULTLINE_FALLBACK_CHANNEL"):
        overrides.setdefault("errors", {})["fallback_channel"] = channel

    return FaultlineConfig(**_deep_merge(raw, overrides))
