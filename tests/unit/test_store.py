"""Unit tests for the metrics store."""

import dataclasses

import pytest

from relay_metrics.metrics import Label, MetricKind, MetricsStore, Record, RecordHandle


class TestLabel:
    """Test Label value object."""

    def test_format(self):
        """Test label renders as name="value"."""
        assert Label("state", "opened").format() == 'state="opened"'

    def test_format_escapes_value(self):
        """Test quotes, backslashes and newlines are escaped."""
        label = Label("path", 'a\\b"c\nd')

        assert label.format() == 'path="a\\\\b\\"c\\nd"'

    def test_is_immutable(self):
        """Test labels cannot be mutated after creation."""
        label = Label("type", "tap")

        with pytest.raises(dataclasses.FrozenInstanceError):
            label.value = "ntor"  # type: ignore[misc]


class TestMetricsStore:
    """Test MetricsStore add/reset/get_records."""

    def test_new_store_is_empty(self):
        """Test a fresh store holds no records."""
        store = MetricsStore()

        assert store.get_records() == ()
        assert len(store) == 0

    def test_add_creates_default_record(self):
        """Test add appends a record with no labels and a zero value."""
        store = MetricsStore()

        handle = store.add(MetricKind.COUNTER, "bytes_total", "Bytes")

        assert isinstance(handle, RecordHandle)
        assert store.get_records() == (
            Record(name="bytes_total", kind=MetricKind.COUNTER, help="Bytes"),
        )
        assert store.get_records()[0].value == 0
        assert store.get_records()[0].labels == ()

    def test_labels_keep_insertion_order_without_dedup(self):
        """Test labels are appended in call order and never deduplicated."""
        store = MetricsStore()

        store.add(MetricKind.GAUGE, "m", "h").add_label("type", "tap").add_label(
            "action", "processed"
        ).add_label("type", "tap")

        record = store.get_records()[0]
        assert record.labels == (
            Label("type", "tap"),
            Label("action", "processed"),
            Label("type", "tap"),
        )

    def test_update_last_write_wins(self):
        """Test the last update sets the record value."""
        store = MetricsStore()
        handle = store.add(MetricKind.GAUGE, "m", "h")

        handle.update(3)
        handle.update(11)

        assert store.get_records()[0].value == 11

    def test_records_keep_add_order(self):
        """Test records come back in the order they were added."""
        store = MetricsStore()
        for name in ("c", "a", "b"):
            store.add(MetricKind.GAUGE, name, "h")

        assert [r.name for r in store.get_records()] == ["c", "a", "b"]

    def test_same_name_different_labels(self):
        """Test several records may share a name and differ by labels."""
        store = MetricsStore()
        store.add(MetricKind.GAUGE, "sockets", "h").add_label("state", "opened").update(7)
        store.add(MetricKind.GAUGE, "sockets", "h").update(100)

        records = store.get_records()
        assert len(records) == 2
        assert records[0].label_dict() == {"state": "opened"}
        assert records[1].label_dict() == {}
        assert store.get_names() == ["sockets"]

    def test_reset_empties_store(self):
        """Test reset followed by get_records yields nothing."""
        store = MetricsStore()
        store.add(MetricKind.COUNTER, "a", "h").update(1)
        store.add(MetricKind.COUNTER, "b", "h").update(2)

        store.reset()

        assert store.get_records() == ()

    def test_reset_is_idempotent(self):
        """Test resetting an empty store twice is fine."""
        store = MetricsStore()

        store.reset()
        store.reset()

        assert len(store) == 0

    def test_snapshot_is_not_changed_by_later_updates(self):
        """Test records already returned are frozen copies."""
        store = MetricsStore()
        handle = store.add(MetricKind.GAUGE, "m", "h").update(1)

        snapshot = store.get_records()
        handle.update(2).add_label("k", "v")

        assert snapshot[0].value == 1
        assert snapshot[0].labels == ()
        assert store.get_records()[0].value == 2

    def test_handle_after_reset_does_not_touch_store(self):
        """Test a handle kept across reset writes to a discarded record."""
        store = MetricsStore()
        stale = store.add(MetricKind.GAUGE, "m", "h")
        store.reset()
        store.add(MetricKind.GAUGE, "n", "h").update(5)

        stale.update(99)

        assert [(r.name, r.value) for r in store.get_records()] == [("n", 5)]

    def test_get_names_first_appearance_order(self):
        """Test get_names lists each name once in first-seen order."""
        store = MetricsStore()
        for name in ("b", "a", "b", "c", "a"):
            store.add(MetricKind.GAUGE, name, "h")

        assert store.get_names() == ["b", "a", "c"]

    def test_iteration_yields_records(self):
        """Test iterating a store yields its records."""
        store = MetricsStore()
        store.add(MetricKind.GAUGE, "m", "h").update(4)

        assert [r.value for r in store] == [4]


class TestMetricKind:
    """Test MetricKind enum."""

    def test_values_are_exposition_type_names(self):
        """Test kind values match exposition type names."""
        assert MetricKind.COUNTER.value == "counter"
        assert MetricKind.GAUGE.value == "gauge"
