"""Logging configuration for relay metrics."""

import logging
from dataclasses import dataclass
from typing import Any

import structlog


@dataclass
class RelayLoggingConfig:
    """Configuration for relay metrics logging.

    Example:
        ```python
        config = RelayLoggingConfig(level="DEBUG", json_output=True)
        configure_logging(config)
        ```
    """

    # Global log level
    level: str = "INFO"

    json_output: bool = False
    """Render log lines as JSON instead of the console renderer"""

    scrape_debug: bool = False
    """Emit a debug event for every completed scrape"""

    def get_level_number(self) -> int:
        """Get the stdlib numeric level for the configured level name.

        Returns:
            Numeric log level, INFO when the name is unknown
        """
        level = logging.getLevelName(self.level.upper())
        if isinstance(level, int):
            return level
        return logging.INFO

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RelayLoggingConfig":
        """Create configuration from dictionary.

        Args:
            config_dict: Configuration dictionary

        Returns:
            RelayLoggingConfig instance
        """
        return cls(**config_dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "level": self.level,
            "json_output": self.json_output,
            "scrape_debug": self.scrape_debug,
        }


# Global default configuration
_default_config = RelayLoggingConfig()


def get_logging_config() -> RelayLoggingConfig:
    """Get global logging configuration.

    Returns:
        Current global RelayLoggingConfig
    """
    return _default_config


def set_logging_config(config: RelayLoggingConfig) -> None:
    """Set global logging configuration.

    Args:
        config: RelayLoggingConfig to set as global
    """
    global _default_config
    _default_config = config


def configure_logging(config: RelayLoggingConfig | None = None) -> None:
    """Configure structlog for the relay process.

    Installs the processor chain (contextvars merge, level filter, ISO
    timestamps, JSON or console rendering) and makes ``config`` the global
    logging configuration.

    Args:
        config: Configuration to apply; the current global one when omitted
    """
    if config is None:
        config = get_logging_config()
    set_logging_config(config)

    renderer: Any
    if config.json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(config.get_level_number()),
        cache_logger_on_first_use=False,
    )


__all__ = [
    "RelayLoggingConfig",
    "configure_logging",
    "get_logging_config",
    "set_logging_config",
]
