"""Abstract base class every platform probe implements."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hostnet.exceptions import NotImplementedProbeError
from hostnet.models.connection import ConnectionStat
from hostnet.models.counters import IOCountersStat, ProtoCountersStat
from hostnet.models.filter import ConntrackStat, FilterStat
from hostnet.models.interface import InterfaceStat


class BaseProbe(ABC):
    """Source of raw network snapshots for one operating system.

    Every operation returns a fully populated snapshot or raises:
    ``NotImplementedProbeError`` when the platform has no backend for it, or
    ``ProbeFailure`` when the OS source could not be read or parsed.
    """

    platform: str = ""

    @abstractmethod
    def io_counters(self, pernic: bool) -> list[IOCountersStat]:
        """Per-interface I/O counters, in OS enumeration order."""

    @abstractmethod
    def interfaces(self) -> list[InterfaceStat]:
        """Configured interfaces with their addresses."""

    @abstractmethod
    def proto_counters(self, protocols: list[str] | None) -> list[ProtoCountersStat]:
        """Protocol counters; ``None`` or empty means every known protocol."""

    @abstractmethod
    def connections(self, kind: str) -> list[ConnectionStat]:
        """Sockets matching a validated connection ``kind``."""

    @abstractmethod
    def filter_counters(self) -> list[FilterStat]:
        """Connection tracking count and maximum."""

    def conntrack_stats(self, percpu: bool) -> list[ConntrackStat]:
        """Per-CPU conntrack statistics."""
        raise NotImplementedProbeError("conntrack_stats", self.platform)
