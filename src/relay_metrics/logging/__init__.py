"""Structured logging setup and per-scrape logging context."""

from .config import (
    RelayLoggingConfig,
    configure_logging,
    get_logging_config,
    set_logging_config,
)
from .context import ScrapeContext, clear_context, get_current_scrape_id


__all__ = [
    "RelayLoggingConfig",
    "configure_logging",
    "ScrapeContext",
    "get_current_scrape_id",
    "clear_context",
    "get_logging_config",
    "set_logging_config",
]
