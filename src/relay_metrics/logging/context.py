"""Scrape logging context with per-cycle IDs."""

import contextlib
import contextvars
import secrets
import time
from dataclasses import dataclass, field
from typing import Any

import structlog


# Context variables for the scrape currently running on this thread
_scrape_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scrape_id", default=None
)
_operation_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)


def _generate_id() -> str:
    """Generate a unique ID for scrape tracking.

    Returns:
        12-character hexadecimal ID
    """
    return secrets.token_hex(6)


@dataclass
class ScrapeContext:
    """Logging context for one scrape cycle.

    Binds a scrape ID and operation name into structlog's contextvars so every
    log line emitted by fill callbacks during the cycle can be correlated.

    Example:
        ```python
        with ScrapeContext(operation="get_snapshot") as ctx:
            logger.debug("relay_metrics.scrape.started", **ctx.to_log_dict())
        ```
    """

    scrape_id: str | None = None
    operation: str | None = None

    _start_time: float = field(default_factory=time.monotonic)
    _token_scrape_id: contextvars.Token | None = field(default=None, init=False, repr=False)
    _token_operation: contextvars.Token | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.scrape_id is None:
            self.scrape_id = _generate_id()

    def __enter__(self) -> "ScrapeContext":
        """Enter context and bind to contextvars."""
        self._token_scrape_id = _scrape_id_var.set(self.scrape_id)
        self._token_operation = _operation_var.set(self.operation)

        structlog.contextvars.bind_contextvars(
            scrape_id=self.scrape_id,
            operation=self.operation,
        )
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context and unbind from contextvars."""
        if self._token_scrape_id:
            _scrape_id_var.reset(self._token_scrape_id)
        if self._token_operation:
            _operation_var.reset(self._token_operation)

        structlog.contextvars.unbind_contextvars("scrape_id", "operation")

    def to_log_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging."""
        log_dict: dict[str, Any] = {"scrape_id": self.scrape_id}
        if self.operation:
            log_dict["operation"] = self.operation
        return log_dict

    def get_duration(self) -> float:
        """Get elapsed time since context creation, in seconds."""
        return time.monotonic() - self._start_time


def get_current_scrape_id() -> str | None:
    """Return the ID of the scrape running in this context, if any."""
    return _scrape_id_var.get()


def clear_context() -> None:
    """Clear all scrape context from contextvars.

    Useful for testing or explicit context cleanup.
    """
    _scrape_id_var.set(None)
    _operation_var.set(None)

    with contextlib.suppress(KeyError):
        structlog.contextvars.unbind_contextvars("scrape_id", "operation")


__all__ = [
    "ScrapeContext",
    "get_current_scrape_id",
    "clear_context",
]
