"""Snapshot API: probe, then aggregate where the caller asked for a summary."""

from __future__ import annotations

from hostnet.aggregate import sum_conntrack_stats, sum_io_counters
from hostnet.kinds import tables_for
from hostnet.models.connection import ConnectionStat
from hostnet.models.counters import IOCountersStat, ProtoCountersStat
from hostnet.models.filter import ConntrackStat, FilterStat
from hostnet.models.interface import InterfaceStat
from hostnet.probes import BaseProbe, create_probe


class NetSnapshot:
    """Snapshot queries against one platform probe.

    The probe is resolved once; pass one explicitly to query another
    backend (or a fake in tests). Nothing is cached between calls.
    """

    def __init__(self, probe: BaseProbe | None = None) -> None:
        self.probe = probe if probe is not None else create_probe()

    def io_counters(self, pernic: bool = False) -> list[IOCountersStat]:
        """I/O counters per interface, or a single ``all`` row when ``pernic`` is False."""
        stats = self.probe.io_counters(pernic)
        if pernic:
            return stats
        return sum_io_counters(stats)

    def interfaces(self) -> list[InterfaceStat]:
        return self.probe.interfaces()

    def proto_counters(self, protocols: list[str] | None = None) -> list[ProtoCountersStat]:
        """Counters for ``protocols`` (all known ones if ``None``); unknown names are omitted."""
        wanted = [p.lower() for p in protocols] if protocols else None
        return self.probe.proto_counters(wanted)

    def connections(self, kind: str = "inet") -> list[ConnectionStat]:
        """Sockets of the given kind.

        Raises:
            InvalidKindError: If ``kind`` is not a known connection kind.
        """
        tables_for(kind)
        return self.probe.connections(kind.lower())

    def filter_counters(self) -> list[FilterStat]:
        return self.probe.filter_counters()

    def conntrack_stats(self, percpu: bool = False) -> list[ConntrackStat]:
        """Conntrack statistics per CPU, or summed into one row."""
        stats = self.probe.conntrack_stats(percpu)
        if percpu:
            return stats
        return sum_conntrack_stats(stats)


_default = NetSnapshot()


def default_snapshot() -> NetSnapshot:
    """The process-wide snapshot bound to the running platform's probe."""
    return _default


def io_counters(pernic: bool = False) -> list[IOCountersStat]:
    return _default.io_counters(pernic)


def interfaces() -> list[InterfaceStat]:
    return _default.interfaces()


def proto_counters(protocols: list[str] | None = None) -> list[ProtoCountersStat]:
    return _default.proto_counters(protocols)


def connections(kind: str = "inet") -> list[ConnectionStat]:
    return _default.connections(kind)


def filter_counters() -> list[FilterStat]:
    return _default.filter_counters()


def conntrack_stats(percpu: bool = False) -> list[ConntrackStat]:
    return _default.conntrack_stats(percpu)
