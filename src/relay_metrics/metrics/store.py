"""
In-memory metrics store rebuilt on every scrape.

A store holds the ordered sequence of records produced by the current scrape
cycle. Records are appended through ``MetricsStore.add`` and then labelled and
valued through the returned ``RecordHandle``. ``reset`` forgets everything.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


Number = int | float


class MetricKind(str, Enum):
    """Metric kind enumeration (value is the exposition type name)."""

    COUNTER = "counter"  # Non-decreasing over process life
    GAUGE = "gauge"  # Point-in-time value, may go up or down


@dataclass(frozen=True)
class Label:
    """One ordered (name, value) label pair."""

    name: str
    value: str

    def format(self) -> str:
        """Render as ``name="value"`` with the value escaped for exposition."""
        escaped = (
            self.value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        )
        return f'{self.name}="{escaped}"'


@dataclass(frozen=True)
class Record:
    """One scraped sample: name, kind, help, ordered labels and value."""

    name: str
    kind: MetricKind
    help: str
    labels: tuple[Label, ...] = ()
    value: Number = 0

    def label_dict(self) -> dict[str, str]:
        """Labels as a dict, in insertion order."""
        return {label.name: label.value for label in self.labels}


@dataclass
class _Entry:
    name: str
    kind: MetricKind
    help: str
    labels: list[Label] = field(default_factory=list)
    value: Number = 0

    def freeze(self) -> Record:
        return Record(
            name=self.name,
            kind=self.kind,
            help=self.help,
            labels=tuple(self.labels),
            value=self.value,
        )


class RecordHandle:
    """Mutation handle for a record added to a ``MetricsStore``.

    Example:
        >>> store = MetricsStore()
        >>> store.add(MetricKind.GAUGE, "sockets", "Open sockets").add_label(
        ...     "state", "opened"
        ... ).update(7)
    """

    __slots__ = ("_entry",)

    def __init__(self, entry: _Entry) -> None:
        self._entry = entry

    def add_label(self, name: str, value: str) -> "RecordHandle":
        """
        Append one label to the record.

        Labels keep call order and are not deduplicated.

        Args:
            name: Label name
            value: Label value

        Returns:
            This handle, for chaining
        """
        self._entry.labels.append(Label(name, value))
        return self

    def update(self, value: Number) -> "RecordHandle":
        """
        Overwrite the record's value. Last write wins.

        Args:
            value: New numeric value

        Returns:
            This handle, for chaining
        """
        self._entry.value = value
        return self

    @property
    def record(self) -> Record:
        """Frozen copy of the record as it is now."""
        return self._entry.freeze()


class MetricsStore:
    """
    Ordered sequence of records for the current scrape cycle.

    The store keeps no memory of earlier scrapes once reset. It performs no
    locking: whoever drives scrapes must serialize them.
    """

    def __init__(self) -> None:
        self._entries: list[_Entry] = []

    def reset(self) -> None:
        """Discard every record held. Idempotent."""
        self._entries = []

    def add(self, kind: MetricKind, name: str, help: str) -> RecordHandle:
        """
        Append a new record with no labels and a zero value.

        Args:
            kind: Metric kind
            name: Metric name
            help: Human readable description

        Returns:
            Handle used to label and value the new record
        """
        entry = _Entry(name=name, kind=kind, help=help)
        self._entries.append(entry)
        return RecordHandle(entry)

    def get_records(self) -> tuple[Record, ...]:
        """Return a frozen snapshot of every record added since the last reset."""
        return tuple(entry.freeze() for entry in self._entries)

    def get_names(self) -> list[str]:
        """Return metric names in order of first appearance."""
        return list(dict.fromkeys(entry.name for entry in self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.get_records())

    def __repr__(self) -> str:
        return f"MetricsStore(records={len(self._entries)})"


__all__ = [
    "MetricKind",
    "Label",
    "Record",
    "RecordHandle",
    "MetricsStore",
]
