"""Configuration management for the progression engine.

Centralized configuration using pydantic-settings, supporting environment
variables, .env files and runtime overrides.

Example:
    >>> from pf_engine.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.app_name
    'Pathfinder Progression Engine'

Environment Variables:
    PF_ENGINE_DEBUG: Enable debug mode
    PF_ENGINE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    PF_ENGINE_JSON_LOGS: Emit JSON log lines
    PF_ENGINE_RULES_CATALOG_PATH: Path to a JSON rules catalog
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pf_engine.core.exceptions import ConfigurationError


class RulesSettings(BaseSettings):
    """Configuration for the rules catalog.

    Attributes:
        catalog_path: Optional JSON catalog replacing the built-in core classes.
    """

    model_config = SettingsConfigDict(
        env_prefix="PF_ENGINE_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    catalog_path: Path | None = Field(
        default=None,
        description="Path to a JSON rules catalog",
    )

    @field_validator("catalog_path", mode="after")
    @classmethod
    def validate_catalog_path(cls, value: Path | None) -> Path | None:
        """Ensure a configured catalog points at an existing JSON file.

        Args:
            value: The configured path, if any.

        Returns:
            The validated path.

        Raises:
            ConfigurationError: If the file is missing or not JSON.
        """
        if value is None:
            return value
        if value.suffix.lower() != ".json":
            raise ConfigurationError(
                f"Rules catalog must be a .json file, got {value}",
                config_key="catalog_path",
            )
        if not value.is_file():
            raise ConfigurationError(
                f"Rules catalog not found: {value}",
                config_key="catalog_path",
            )
        return value


class Settings(BaseSettings):
    """Main engine settings.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Logging level.
        json_logs: Emit JSON log lines instead of console output.
        log_file: Optional log file path.
        rules: Rules catalog settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="PF_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Pathfinder Progression Engine",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path",
    )

    rules: RulesSettings = Field(default_factory=RulesSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the engine settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load engine settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "RulesSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
