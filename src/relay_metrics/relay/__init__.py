"""Relay load metrics: descriptor table, fill callbacks and scrape driver."""

from .accounting import (
    HandshakeStats,
    HandshakeType,
    OomStats,
    OomSubsystem,
    RelayCounters,
    RelayStatsSource,
    SocketStats,
    handshake_type_label,
    oom_subsystem_label,
)
from .metrics import (
    BASE_METRICS,
    RelayMetrics,
    RelayMetricsKey,
    free,
    get_relay_metrics,
    get_stores,
    init,
)

__all__ = [
    "BASE_METRICS",
    "HandshakeStats",
    "HandshakeType",
    "OomStats",
    "OomSubsystem",
    "RelayCounters",
    "RelayMetrics",
    "RelayMetricsKey",
    "RelayStatsSource",
    "SocketStats",
    "free",
    "get_relay_metrics",
    "get_stores",
    "handshake_type_label",
    "init",
    "oom_subsystem_label",
]
