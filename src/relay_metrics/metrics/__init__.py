"""
Pull-based metrics registry primitives.

A ``DescriptorTable`` of ``MetricDescriptor`` entries names every metric; each
descriptor's fill callback appends ``Record`` entries to a ``MetricsStore``
that is rebuilt on every scrape.

Example:
    >>> from relay_metrics.metrics import MetricKind, MetricsStore
    >>>
    >>> store = MetricsStore()
    >>> store.add(MetricKind.GAUGE, "tor_relay_load_socket_total", "Total number of sockets") \\
    ...     .add_label("state", "opened").update(7)
    >>> [r.value for r in store.get_records()]
    [7]
"""

from .constants import MetricHelp, MetricLabels, RelayMetricNames
from .descriptors import DescriptorTable, FillContext, FillFn, MetricDescriptor
from .prometheus import RelayMetricsCollector, generate_text, records_to_metrics
from .store import Label, MetricKind, MetricsStore, Record, RecordHandle

__all__ = [
    "DescriptorTable",
    "FillContext",
    "FillFn",
    "Label",
    "MetricDescriptor",
    "MetricHelp",
    "MetricKind",
    "MetricLabels",
    "MetricsStore",
    "Record",
    "RecordHandle",
    "RelayMetricNames",
    "RelayMetricsCollector",
    "generate_text",
    "records_to_metrics",
]
