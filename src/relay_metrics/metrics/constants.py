"""
Metric name and label constants for relay metrics.

Names are bare; the configured namespace (``tor`` by default) is prefixed
when the descriptor table is bound to a ``RelayMetrics`` instance.
"""


class RelayMetricNames:
    """Metric name constants for relay load metrics."""

    # Counters
    OOM_BYTES_TOTAL = "relay_load_oom_bytes_total"
    ONIONSKINS_TOTAL = "relay_load_onionskins_total"

    # Gauges
    SOCKET_TOTAL = "relay_load_socket_total"


class MetricLabels:
    """Standard label names and values for relay metrics."""

    # Socket labels
    STATE = "state"  # opened
    STATE_OPENED = "opened"

    # Onionskin labels
    TYPE = "type"  # tap, fast, ntor
    ACTION = "action"  # processed, dropped
    ACTION_PROCESSED = "processed"
    ACTION_DROPPED = "dropped"

    # OOM labels
    SUBSYS = "subsys"  # cell, dns, geoip, hsdir


class MetricHelp:
    """Help strings published with each relay metric."""

    OOM_BYTES_TOTAL = "Total number of bytes the OOM has freed by subsystem"
    ONIONSKINS_TOTAL = "Total number of onionskins handled"
    SOCKET_TOTAL = "Total number of sockets"


__all__ = ["RelayMetricNames", "MetricLabels", "MetricHelp"]
