"""
Relay Metrics Package

Pull-based metrics registry for a network relay. Internal counters (open
sockets, onionskins handled, bytes freed by the OOM handler) are read from the
owning subsystems on demand and rebuilt into a fresh store on every scrape.

This package provides:
- MetricsStore / Record: the scraped record sequence
- DescriptorTable / MetricDescriptor: the static metric table
- RelayMetrics: the scrape driver for the relay's base metrics
- RelayMetricsCollector: prometheus_client bridge for exposition

Usage:
    from relay_metrics import RelayCounters, RelayMetrics

    counters = RelayCounters(max_sockets=1024)
    relay_metrics = RelayMetrics(counters)
    for store in relay_metrics.get_snapshot():
        for record in store.get_records():
            print(record.name, record.label_dict(), record.value)
"""

from .exceptions import (
    DescriptorTableError,
    MetricsNotInitializedError,
    RelayMetricsConfigError,
    RelayMetricsException,
    ScrapeError,
    UnknownDimensionError,
)
from .metrics import (
    DescriptorTable,
    FillContext,
    Label,
    MetricDescriptor,
    MetricKind,
    MetricsStore,
    Record,
    RecordHandle,
    RelayMetricsCollector,
    generate_text,
)
from .relay import (
    BASE_METRICS,
    HandshakeType,
    OomSubsystem,
    RelayCounters,
    RelayMetrics,
    RelayMetricsKey,
)
from .settings import RelayMetricsSettings, get_settings

__version__ = "0.1.0"

__all__ = [
    # Store
    "Label",
    "MetricKind",
    "MetricsStore",
    "Record",
    "RecordHandle",
    # Descriptors
    "DescriptorTable",
    "FillContext",
    "MetricDescriptor",
    # Relay
    "BASE_METRICS",
    "HandshakeType",
    "OomSubsystem",
    "RelayCounters",
    "RelayMetrics",
    "RelayMetricsKey",
    # Exposition
    "RelayMetricsCollector",
    "generate_text",
    # Settings
    "RelayMetricsSettings",
    "get_settings",
    # Exceptions
    "RelayMetricsException",
    "DescriptorTableError",
    "UnknownDimensionError",
    "MetricsNotInitializedError",
    "ScrapeError",
    "RelayMetricsConfigError",
]
