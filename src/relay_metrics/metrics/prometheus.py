"""
Prometheus collector bridge.

Exposes scrape snapshots to the prometheus_client exposition stack so the
caller can render them with ``generate_latest`` or serve them with
``start_http_server``. No values are cached here: every ``collect`` call
triggers a fresh scrape. ``generate_text`` renders a snapshot directly,
keeping label insertion order.
"""

from collections.abc import Iterator, Sequence
from typing import Protocol

from prometheus_client.core import Metric
from prometheus_client.utils import floatToGoString

from .descriptors import DescriptorTable
from .store import MetricKind, MetricsStore, Record


_TOTAL_SUFFIX = "_total"


class SnapshotSource(Protocol):
    """Anything that can produce a scrape snapshot."""

    table: DescriptorTable

    def get_snapshot(self) -> Sequence[MetricsStore]: ...


def _family_name(name: str, kind: MetricKind) -> str:
    """prometheus_client appends ``_total`` to counter family names itself."""
    if kind is MetricKind.COUNTER and name.endswith(_TOTAL_SUFFIX):
        return name[: -len(_TOTAL_SUFFIX)]
    return name


def _sample_name(name: str, kind: MetricKind) -> str:
    if kind is MetricKind.COUNTER:
        return _family_name(name, kind) + _TOTAL_SUFFIX
    return name


def records_to_metrics(records: Sequence[Record]) -> list[Metric]:
    """
    Group records by name into prometheus_client metric families.

    Families appear in order of first record; samples keep record order and
    each sample's labels keep insertion order.

    Args:
        records: Records of one scrape

    Returns:
        One Metric per distinct record name
    """
    families: dict[str, Metric] = {}
    for record in records:
        family = families.get(record.name)
        if family is None:
            family = Metric(
                _family_name(record.name, record.kind),
                record.help,
                record.kind.value,
            )
            families[record.name] = family
        family.add_sample(
            _sample_name(record.name, record.kind),
            record.label_dict(),
            record.value,
        )
    return list(families.values())


def _escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def generate_text(stores: Sequence[MetricsStore]) -> str:
    """
    Render scraped stores in the Prometheus text exposition format.

    Unlike ``prometheus_client.generate_latest``, which sorts each sample's
    labels, labels are written in the order they were added to the record.
    HELP and TYPE lines appear once per metric name, before its first sample.

    Args:
        stores: Stores returned by a scrape

    Returns:
        Exposition text, one line per sample
    """
    lines: list[str] = []
    for store in stores:
        by_name: dict[str, list[Record]] = {}
        for record in store.get_records():
            by_name.setdefault(record.name, []).append(record)

        for name, records in by_name.items():
            first = records[0]
            lines.append(f"# HELP {name} {_escape_help(first.help)}")
            lines.append(f"# TYPE {name} {first.kind.value}")
            for record in records:
                labels = ",".join(label.format() for label in record.labels)
                series = f"{name}{{{labels}}}" if labels else name
                lines.append(f"{series} {floatToGoString(record.value)}")
    return "".join(f"{line}\n" for line in lines)


class RelayMetricsCollector:
    """
    prometheus_client custom collector backed by relay metric scrapes.

    Example:
        >>> from prometheus_client import CollectorRegistry, generate_latest
        >>> registry = CollectorRegistry()
        >>> registry.register(RelayMetricsCollector(relay_metrics))
        >>> print(generate_latest(registry).decode())
    """

    def __init__(self, source: SnapshotSource) -> None:
        """
        Initialize the collector.

        Args:
            source: Object whose ``get_snapshot`` is called on every collect
        """
        self._source = source

    def describe(self) -> Iterator[Metric]:
        """Yield sample-less families so registration does not scrape."""
        for descriptor in self._source.table:
            yield Metric(
                _family_name(descriptor.name, descriptor.kind),
                descriptor.help,
                descriptor.kind.value,
            )

    def collect(self) -> Iterator[Metric]:
        """Scrape once and yield one family per metric name."""
        for store in self._source.get_snapshot():
            yield from records_to_metrics(store.get_records())


__all__ = [
    "RelayMetricsCollector",
    "SnapshotSource",
    "generate_text",
    "records_to_metrics",
]
