"""
Static metric descriptors and the table that holds them.

Each descriptor names one logical metric and points at the fill callback that
produces its records. The descriptor key MUST be its index in the table;
``DescriptorTable`` refuses to build otherwise.
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from ..exceptions import DescriptorTableError
from .store import MetricKind, MetricsStore, RecordHandle


FillFn = Callable[["FillContext"], None]


@dataclass(frozen=True)
class MetricDescriptor:
    """Static definition of one metric and its fill callback."""

    key: int
    kind: MetricKind
    name: str
    help: str
    fill_fn: FillFn | None = None

    def with_name(self, name: str) -> "MetricDescriptor":
        """Return a copy of this descriptor under another metric name."""
        return MetricDescriptor(
            key=self.key,
            kind=self.kind,
            name=name,
            help=self.help,
            fill_fn=self.fill_fn,
        )


@dataclass(frozen=True)
class FillContext:
    """
    Everything a fill callback may touch during one scrape.

    Attributes:
        store: Store the callback appends records to
        descriptor: Descriptor being filled
        sources: Read accessors of the subsystems holding the live counters
    """

    store: MetricsStore
    descriptor: MetricDescriptor
    sources: Any

    def add(self) -> RecordHandle:
        """Add a record carrying this descriptor's kind, name and help."""
        return self.store.add(
            self.descriptor.kind, self.descriptor.name, self.descriptor.help
        )


class DescriptorTable:
    """
    Immutable, ordered collection of metric descriptors indexed by key.

    Raises:
        DescriptorTableError: If a descriptor's key is not its index, or two
            descriptors share a name
    """

    def __init__(self, descriptors: Iterable[MetricDescriptor]) -> None:
        self._descriptors: tuple[MetricDescriptor, ...] = tuple(descriptors)
        self._by_name: dict[str, MetricDescriptor] = {}

        for index, descriptor in enumerate(self._descriptors):
            if descriptor.key != index:
                raise DescriptorTableError(
                    "Descriptor key does not match its table index",
                    key=descriptor.key,
                    index=index,
                    context={"name": descriptor.name},
                )
            if descriptor.name in self._by_name:
                raise DescriptorTableError(
                    "Duplicate metric name in descriptor table",
                    key=descriptor.key,
                    index=index,
                    context={"name": descriptor.name},
                )
            self._by_name[descriptor.name] = descriptor

    def __getitem__(self, key: int) -> MetricDescriptor:
        return self._descriptors[key]

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[MetricDescriptor]:
        return iter(self._descriptors)

    def get(self, name: str) -> MetricDescriptor | None:
        """Look up a descriptor by metric name."""
        return self._by_name.get(name)

    @property
    def names(self) -> list[str]:
        """Metric names in table order."""
        return [descriptor.name for descriptor in self._descriptors]

    def renamed(self, rename: Callable[[str], str]) -> "DescriptorTable":
        """
        Build a new table with every metric name passed through ``rename``.

        Used to apply the configured namespace prefix to the static table.
        """
        return DescriptorTable(d.with_name(rename(d.name)) for d in self._descriptors)

    def __repr__(self) -> str:
        return f"DescriptorTable({self.names!r})"


__all__ = [
    "FillFn",
    "FillContext",
    "MetricDescriptor",
    "DescriptorTable",
]
