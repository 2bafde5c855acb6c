"""Unit tests for metric descriptors and the descriptor table."""

import pytest

from relay_metrics.exceptions import DescriptorTableError
from relay_metrics.metrics import (
    DescriptorTable,
    FillContext,
    MetricDescriptor,
    MetricKind,
    MetricsStore,
)
from relay_metrics.relay import BASE_METRICS, RelayMetricsKey


def _descriptor(key, name, fill_fn=None):
    return MetricDescriptor(
        key=key, kind=MetricKind.COUNTER, name=name, help=f"help {name}", fill_fn=fill_fn
    )


class TestDescriptorTable:
    """Test DescriptorTable construction and lookup."""

    def test_keys_match_indices(self):
        """Test a well-formed table builds and keeps order."""
        table = DescriptorTable([_descriptor(0, "a"), _descriptor(1, "b")])

        assert len(table) == 2
        assert table.names == ["a", "b"]
        assert table[1].name == "b"

    def test_key_index_mismatch_is_rejected(self):
        """Test a key that differs from its position refuses to build."""
        with pytest.raises(DescriptorTableError) as exc_info:
            DescriptorTable([_descriptor(0, "a"), _descriptor(2, "b")])

        assert exc_info.value.key == 2
        assert exc_info.value.index == 1

    def test_swapped_entries_are_rejected(self):
        """Test reordering entries without renumbering is caught."""
        with pytest.raises(DescriptorTableError):
            DescriptorTable([_descriptor(1, "b"), _descriptor(0, "a")])

    def test_duplicate_name_is_rejected(self):
        """Test two descriptors with one name refuse to build."""
        with pytest.raises(DescriptorTableError, match="Duplicate metric name"):
            DescriptorTable([_descriptor(0, "a"), _descriptor(1, "a")])

    def test_lookup_by_name(self):
        """Test get finds descriptors by metric name."""
        table = DescriptorTable([_descriptor(0, "a")])

        assert table.get("a") is table[0]
        assert table.get("missing") is None

    def test_renamed_keeps_keys_and_callbacks(self):
        """Test renamed prefixes names but keeps keys and fill callbacks."""

        def fill(ctx):
            pass

        table = DescriptorTable([_descriptor(0, "a", fill)])

        renamed = table.renamed(lambda name: f"tor_{name}")

        assert renamed.names == ["tor_a"]
        assert renamed[0].key == 0
        assert renamed[0].fill_fn is fill
        assert table.names == ["a"]

    def test_empty_table(self):
        """Test an empty table is valid."""
        assert len(DescriptorTable([])) == 0


class TestBaseMetrics:
    """Test the static relay descriptor table."""

    def test_every_key_equals_its_index(self):
        """Test key == index for all relay descriptors."""
        for index, descriptor in enumerate(BASE_METRICS):
            assert descriptor.key == index

    def test_table_order(self):
        """Test the relay table order is OOM, onionskins, sockets."""
        assert [d.key for d in BASE_METRICS] == [
            RelayMetricsKey.OOM_BYTES,
            RelayMetricsKey.ONIONSKINS,
            RelayMetricsKey.SOCKETS,
        ]
        assert BASE_METRICS.names == [
            "relay_load_oom_bytes_total",
            "relay_load_onionskins_total",
            "relay_load_socket_total",
        ]

    def test_kinds(self):
        """Test the socket metric is a gauge and the others counters."""
        assert BASE_METRICS[RelayMetricsKey.OOM_BYTES].kind == MetricKind.COUNTER
        assert BASE_METRICS[RelayMetricsKey.ONIONSKINS].kind == MetricKind.COUNTER
        assert BASE_METRICS[RelayMetricsKey.SOCKETS].kind == MetricKind.GAUGE

    def test_every_descriptor_has_a_fill_fn(self):
        """Test no relay descriptor is missing its fill callback."""
        assert all(d.fill_fn is not None for d in BASE_METRICS)


class TestFillContext:
    """Test FillContext helper."""

    def test_add_copies_descriptor_fields(self):
        """Test add creates a record with the descriptor's kind, name and help."""
        store = MetricsStore()
        descriptor = _descriptor(0, "a")

        FillContext(store, descriptor, sources=None).add().update(3)

        [record] = store.get_records()
        assert record.name == "a"
        assert record.kind == MetricKind.COUNTER
        assert record.help == "help a"
        assert record.value == 3
