"""Pytest configuration and shared fixtures for relay metrics tests."""

import sys
from pathlib import Path

import pytest


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from relay_metrics.logging import clear_context
from relay_metrics.relay import (
    HandshakeType,
    OomSubsystem,
    RelayCounters,
    RelayMetrics,
    free,
)
from relay_metrics.settings import RelayMetricsSettings, get_settings


# ==================== Isolation ====================


@pytest.fixture(autouse=True)
def _isolate_process_state():
    """Drop the process-wide instance, cached settings and log context."""
    free()
    get_settings.cache_clear()
    clear_context()
    yield
    free()
    get_settings.cache_clear()
    clear_context()


# ==================== Settings Fixtures ====================


@pytest.fixture
def settings() -> RelayMetricsSettings:
    """Create settings with the default namespace."""
    return RelayMetricsSettings(namespace="tor", scrape_debug=True)


# ==================== Counter Fixtures ====================


@pytest.fixture
def counters() -> RelayCounters:
    """Create relay counters with known values for every dimension."""
    return RelayCounters(
        n_open_sockets=7,
        max_sockets=100,
        handshakes_assigned={
            HandshakeType.TAP: 3,
            HandshakeType.FAST: 5,
            HandshakeType.NTOR: 20,
        },
        handshakes_dropped={
            HandshakeType.TAP: 1,
            HandshakeType.FAST: 0,
            HandshakeType.NTOR: 2,
        },
        oom_bytes_removed={
            OomSubsystem.CELL: 10,
            OomSubsystem.DNS: 20,
            OomSubsystem.GEOIP: 0,
            OomSubsystem.HSDIR: 5,
        },
    )


@pytest.fixture
def relay_metrics(counters, settings) -> RelayMetrics:
    """Create relay metrics bound to the known counters."""
    return RelayMetrics(counters, settings=settings)

