"""
Settings Management Module

Provides pydantic-based configuration for relay metrics with:
- YAML configuration file loading
- Environment variable overrides (RELAY_METRICS_*)
- Validation of the metric name namespace
"""

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import RelayMetricsConfigError
from .logging import RelayLoggingConfig


_NAMESPACE_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class RelayMetricsSettings(BaseSettings):
    """
    Relay metrics settings.

    Configuration hierarchy (lowest to highest precedence):
    1. Field defaults
    2. YAML file passed to ``load_from_yaml``
    3. Environment variables (RELAY_METRICS_*)

    Examples:
        >>> settings = get_settings()
        >>> settings.namespace
        'tor'
        >>> settings.metric_name("relay_load_socket_total")
        'tor_relay_load_socket_total'
    """

    model_config = SettingsConfigDict(
        env_prefix="RELAY_METRICS_",
        case_sensitive=False,
        extra="ignore",
    )

    namespace: str = "tor"
    log_level: str = "INFO"
    log_json: bool = False
    scrape_debug: bool = False

    @field_validator("namespace")
    @classmethod
    def _check_namespace(cls, value: str) -> str:
        if value and not _NAMESPACE_PATTERN.match(value):
            raise ValueError(f"invalid metric namespace: {value!r}")
        return value

    def metric_name(self, name: str) -> str:
        """Prefix a bare metric name with the configured namespace."""
        if not self.namespace:
            return name
        return f"{self.namespace}_{name}"

    def logging_config(self) -> RelayLoggingConfig:
        """Build the logging configuration described by these settings."""
        return RelayLoggingConfig(
            level=self.log_level,
            json_output=self.log_json,
            scrape_debug=self.scrape_debug,
        )

    @classmethod
    def _env_overrides(cls) -> set[str]:
        """Names of the fields currently set through the environment."""
        prefix = cls.model_config.get("env_prefix", "").upper()
        env_names = {name.upper() for name in os.environ}
        return {name for name in cls.model_fields if f"{prefix}{name.upper()}" in env_names}

    @classmethod
    def load_from_yaml(cls, config_path: Path | None = None) -> "RelayMetricsSettings":
        """
        Load settings from a YAML configuration file.

        Values found in the environment still take precedence over the file.

        Args:
            config_path: Path to config file; defaults only when None or missing

        Returns:
            RelayMetricsSettings instance

        Raises:
            RelayMetricsConfigError: If the file does not hold a mapping or a
                value fails validation
        """
        config_data: dict[str, Any] = {}
        if config_path is not None and config_path.exists():
            with open(config_path) as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise RelayMetricsConfigError(
                    "Relay metrics config must be a mapping",
                    field_name=str(config_path),
                    invalid_value=type(loaded).__name__,
                )
            section = loaded.get("relay_metrics", loaded)
            if section is None:
                section = {}
            if not isinstance(section, dict):
                raise RelayMetricsConfigError(
                    "Relay metrics config section must be a mapping",
                    field_name="relay_metrics",
                    invalid_value=type(section).__name__,
                )
            config_data = section

        try:
            # Init kwargs outrank the environment, so drop file values the
            # environment already sets.
            overridden = cls._env_overrides()
            merged = {k: v for k, v in config_data.items() if k not in overridden}
            return cls(**merged)
        except ValueError as e:
            raise RelayMetricsConfigError(
                "Invalid relay metrics settings",
                field_name=str(config_path) if config_path else None,
                context={"error": str(e)},
            ) from e


@lru_cache
def get_settings(config_path: Path | None = None) -> RelayMetricsSettings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to config file

    Returns:
        RelayMetricsSettings instance
    """
    return RelayMetricsSettings.load_from_yaml(config_path)


def reload_settings() -> RelayMetricsSettings:
    """Reload settings by clearing cache."""
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "RelayMetricsSettings",
    "get_settings",
    "reload_settings",
]
