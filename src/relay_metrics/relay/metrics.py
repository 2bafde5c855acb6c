"""
Relay metrics exposed through the metrics port.

The exposed values are internal counters on the relay's fast path, so nothing
is accumulated here: every scrape resets the store and calls each
descriptor's fill callback, which reads the live counters and appends fresh
records.
"""

import threading
from enum import IntEnum
from typing import Any

import structlog

from ..exceptions import MetricsNotInitializedError, ScrapeError
from ..logging import ScrapeContext
from ..metrics import (
    DescriptorTable,
    FillContext,
    MetricDescriptor,
    MetricHelp,
    MetricKind,
    MetricLabels,
    MetricsStore,
    RelayMetricNames,
)
from ..settings import RelayMetricsSettings, get_settings
from .accounting import (
    HandshakeType,
    OomSubsystem,
    RelayStatsSource,
    handshake_type_label,
    oom_subsystem_label,
)


logger = structlog.get_logger(__name__)


class RelayMetricsKey(IntEnum):
    """Keys of the base relay metrics; each is the entry's table index."""

    OOM_BYTES = 0
    ONIONSKINS = 1
    SOCKETS = 2


def fill_socket_values(ctx: FillContext) -> None:
    """Fill the socket metric: opened sockets, then the socket ceiling."""
    ctx.add().add_label(MetricLabels.STATE, MetricLabels.STATE_OPENED).update(
        ctx.sources.get_n_open_sockets()
    )
    # The ceiling record carries no label.
    ctx.add().update(ctx.sources.get_max_sockets())


def fill_onionskins_values(ctx: FillContext) -> None:
    """Fill the onionskin metric: processed and dropped, per handshake type."""
    for handshake_type in HandshakeType:
        type_value = handshake_type_label(handshake_type)

        ctx.add().add_label(MetricLabels.TYPE, type_value).add_label(
            MetricLabels.ACTION, MetricLabels.ACTION_PROCESSED
        ).update(ctx.sources.get_circuit_handshake_assigned(handshake_type))

        ctx.add().add_label(MetricLabels.TYPE, type_value).add_label(
            MetricLabels.ACTION, MetricLabels.ACTION_DROPPED
        ).update(ctx.sources.get_circuit_handshake_dropped(handshake_type))


def fill_oom_values(ctx: FillContext) -> None:
    """Fill the OOM metric: bytes freed, per subsystem."""
    for subsys in OomSubsystem:
        ctx.add().add_label(MetricLabels.SUBSYS, oom_subsystem_label(subsys)).update(
            ctx.sources.get_oom_bytes_removed(subsys)
        )


BASE_METRICS = DescriptorTable(
    [
        MetricDescriptor(
            key=RelayMetricsKey.OOM_BYTES,
            kind=MetricKind.COUNTER,
            name=RelayMetricNames.OOM_BYTES_TOTAL,
            help=MetricHelp.OOM_BYTES_TOTAL,
            fill_fn=fill_oom_values,
        ),
        MetricDescriptor(
            key=RelayMetricsKey.ONIONSKINS,
            kind=MetricKind.COUNTER,
            name=RelayMetricNames.ONIONSKINS_TOTAL,
            help=MetricHelp.ONIONSKINS_TOTAL,
            fill_fn=fill_onionskins_values,
        ),
        MetricDescriptor(
            key=RelayMetricsKey.SOCKETS,
            kind=MetricKind.GAUGE,
            name=RelayMetricNames.SOCKET_TOTAL,
            help=MetricHelp.SOCKET_TOTAL,
            fill_fn=fill_socket_values,
        ),
    ]
)


class RelayMetrics:
    """
    Owner of the relay metrics store; drives one scrape per request.

    Scrapes through ``get_snapshot`` are serialized by an internal lock.
    ``fill_store`` itself is not, and must only be called by a single writer.

    Example:
        >>> counters = RelayCounters(n_open_sockets=7, max_sockets=100)
        >>> relay_metrics = RelayMetrics(counters)
        >>> [store] = relay_metrics.get_snapshot()
        >>> len(store.get_records())
        12
    """

    def __init__(
        self,
        sources: RelayStatsSource,
        table: DescriptorTable = BASE_METRICS,
        settings: RelayMetricsSettings | None = None,
        store: MetricsStore | None = None,
    ) -> None:
        """
        Initialize relay metrics.

        Args:
            sources: Read accessors of the subsystems owning the counters
            table: Descriptor table with bare metric names
            settings: Settings; the cached global settings when omitted
            store: Store to fill; a new one when omitted
        """
        if settings is None:
            settings = get_settings()

        self.sources = sources
        self.table = table.renamed(settings.metric_name)
        self.store = store if store is not None else MetricsStore()
        self._scrape_debug = settings.scrape_debug

        # Same list handed out on every scrape
        self._stores: list[MetricsStore] = [self.store]
        self._lock = threading.Lock()

    def fill_store(self) -> None:
        """
        Reset the store and fill it with every metric of the table.

        A descriptor without a fill callback is logged and skipped. If a fill
        callback raises, the store is emptied and ``ScrapeError`` is raised.

        Raises:
            ScrapeError: If a fill callback failed
        """
        self.store.reset()

        for descriptor in self.table:
            if descriptor.fill_fn is None:
                logger.error(
                    "relay_metrics.descriptor.missing_fill_fn",
                    bug=True,
                    key=descriptor.key,
                    metric_name=descriptor.name,
                )
                continue

            try:
                descriptor.fill_fn(FillContext(self.store, descriptor, self.sources))
            except Exception as e:
                self.store.reset()
                logger.error(
                    "relay_metrics.scrape.fill_failed",
                    key=descriptor.key,
                    metric_name=descriptor.name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise ScrapeError(
                    "Fill callback failed; scrape discarded",
                    metric_name=descriptor.name,
                    key=descriptor.key,
                ) from e

    def get_snapshot(self) -> list[MetricsStore]:
        """
        Scrape every relay metric from live state.

        Returns:
            List holding the freshly filled store. The list object is the
            same on every call and must not be modified by the caller.

        Raises:
            ScrapeError: If a fill callback failed
        """
        with self._lock, ScrapeContext(operation="get_snapshot") as ctx:
            self.fill_store()
            if self._scrape_debug:
                logger.debug(
                    "relay_metrics.scrape.completed",
                    records=len(self.store),
                    duration_ms=round(ctx.get_duration() * 1000, 3),
                )
        return self._stores


# The process-wide relay metrics instance
_relay_metrics: RelayMetrics | None = None


def init(sources: RelayStatsSource, **kwargs: Any) -> RelayMetrics:
    """
    Initialize the process-wide relay metrics.

    Calling this twice is a bug: it is logged and the existing instance is
    kept.

    Args:
        sources: Read accessors of the subsystems owning the counters
        **kwargs: Extra ``RelayMetrics`` arguments (table, settings, store)

    Returns:
        The process-wide RelayMetrics instance
    """
    global _relay_metrics
    if _relay_metrics is not None:
        logger.error("relay_metrics.init.already_initialized", bug=True)
        return _relay_metrics
    _relay_metrics = RelayMetrics(sources, **kwargs)
    return _relay_metrics


def free() -> None:
    """Release the process-wide relay metrics. Idempotent."""
    global _relay_metrics
    _relay_metrics = None


def get_relay_metrics() -> RelayMetrics | None:
    """Return the process-wide relay metrics, or None before init()."""
    return _relay_metrics


def get_stores() -> list[MetricsStore]:
    """
    Scrape the process-wide relay metrics.

    Returns:
        List of filled stores

    Raises:
        MetricsNotInitializedError: If init() was never called
    """
    if _relay_metrics is None:
        raise MetricsNotInitializedError("Relay metrics used before init()")
    return _relay_metrics.get_snapshot()


__all__ = [
    "BASE_METRICS",
    "RelayMetrics",
    "RelayMetricsKey",
    "fill_oom_values",
    "fill_onionskins_values",
    "fill_socket_values",
    "free",
    "get_relay_metrics",
    "get_stores",
    "init",
]
