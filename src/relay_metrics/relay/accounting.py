"""
Read accessors of the relay subsystems that own the live counters.

Fill callbacks only ever pull from these. The dimension enumerations are
closed: adding a member means updating the label conversions below, and a
type checker flags the ``match`` statements that forgot it.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Never, NoReturn, Protocol

from ..exceptions import UnknownDimensionError


class HandshakeType(IntEnum):
    """Circuit handshake (onionskin) types, by wire value."""

    TAP = 0
    FAST = 1
    NTOR = 2


class OomSubsystem(str, Enum):
    """Subsystems the OOM handler can free memory from."""

    CELL = "cell"
    DNS = "dns"
    GEOIP = "geoip"
    HSDIR = "hsdir"


def _unreachable(dimension: str, value: Never) -> NoReturn:
    raise UnknownDimensionError(
        f"Unknown {dimension} value", dimension=dimension, value=value
    )


def handshake_type_label(handshake_type: HandshakeType) -> str:
    """Return the label value for a handshake type.

    Raises:
        UnknownDimensionError: If ``handshake_type`` is not a known type
    """
    match handshake_type:
        case HandshakeType.TAP:
            return "tap"
        case HandshakeType.FAST:
            return "fast"
        case HandshakeType.NTOR:
            return "ntor"
    _unreachable("handshake_type", handshake_type)


def oom_subsystem_label(subsys: OomSubsystem) -> str:
    """Return the label value for an OOM subsystem.

    Raises:
        UnknownDimensionError: If ``subsys`` is not a known subsystem
    """
    match subsys:
        case OomSubsystem.CELL:
            return "cell"
        case OomSubsystem.DNS:
            return "dns"
        case OomSubsystem.GEOIP:
            return "geoip"
        case OomSubsystem.HSDIR:
            return "hsdir"
    _unreachable("oom_subsystem", subsys)


class SocketStats(Protocol):
    """Socket accounting accessors."""

    def get_n_open_sockets(self) -> int: ...

    def get_max_sockets(self) -> int: ...


class HandshakeStats(Protocol):
    """Per-type circuit handshake accounting accessors."""

    def get_circuit_handshake_assigned(self, handshake_type: HandshakeType) -> int: ...

    def get_circuit_handshake_dropped(self, handshake_type: HandshakeType) -> int: ...


class OomStats(Protocol):
    """OOM eviction accounting accessors."""

    def get_oom_bytes_removed(self, subsys: OomSubsystem) -> int: ...


class RelayStatsSource(SocketStats, HandshakeStats, OomStats, Protocol):
    """Every accessor the relay fill callbacks read."""


@dataclass
class RelayCounters:
    """
    In-memory holder of the relay's raw counters.

    Implements ``RelayStatsSource``. Writers use the ``note_*`` and
    ``socket_*`` helpers, which are safe to call from several threads;
    readers get plain integers.

    Attributes:
        n_open_sockets: Sockets currently open
        max_sockets: Configured socket ceiling
        handshakes_assigned: Onionskins processed, by handshake type
        handshakes_dropped: Onionskins dropped, by handshake type
        oom_bytes_removed: Bytes freed by the OOM handler, by subsystem
    """

    n_open_sockets: int = 0
    max_sockets: int = 0
    handshakes_assigned: dict[HandshakeType, int] = field(
        default_factory=lambda: dict.fromkeys(HandshakeType, 0)
    )
    handshakes_dropped: dict[HandshakeType, int] = field(
        default_factory=lambda: dict.fromkeys(HandshakeType, 0)
    )
    oom_bytes_removed: dict[OomSubsystem, int] = field(
        default_factory=lambda: dict.fromkeys(OomSubsystem, 0)
    )

    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    # Read accessors

    def get_n_open_sockets(self) -> int:
        return self.n_open_sockets

    def get_max_sockets(self) -> int:
        return self.max_sockets

    def get_circuit_handshake_assigned(self, handshake_type: HandshakeType) -> int:
        return self.handshakes_assigned.get(handshake_type, 0)

    def get_circuit_handshake_dropped(self, handshake_type: HandshakeType) -> int:
        return self.handshakes_dropped.get(handshake_type, 0)

    def get_oom_bytes_removed(self, subsys: OomSubsystem) -> int:
        return self.oom_bytes_removed.get(subsys, 0)

    # Writers

    def socket_opened(self) -> None:
        with self._lock:
            self.n_open_sockets += 1

    def socket_closed(self) -> None:
        with self._lock:
            if self.n_open_sockets > 0:
                self.n_open_sockets -= 1

    def note_handshake_assigned(self, handshake_type: HandshakeType, count: int = 1) -> None:
        with self._lock:
            self.handshakes_assigned[handshake_type] = (
                self.handshakes_assigned.get(handshake_type, 0) + count
            )

    def note_handshake_dropped(self, handshake_type: HandshakeType, count: int = 1) -> None:
        with self._lock:
            self.handshakes_dropped[handshake_type] = (
                self.handshakes_dropped.get(handshake_type, 0) + count
            )

    def note_oom_bytes_removed(self, subsys: OomSubsystem, n_bytes: int) -> None:
        with self._lock:
            self.oom_bytes_removed[subsys] = self.oom_bytes_removed.get(subsys, 0) + n_bytes


__all__ = [
    "HandshakeType",
    "OomSubsystem",
    "handshake_type_label",
    "oom_subsystem_label",
    "SocketStats",
    "HandshakeStats",
    "OomStats",
    "RelayStatsSource",
    "RelayCounters",
]
