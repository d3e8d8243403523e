"""Probe backed by psutil, for macOS, Windows and the BSDs.

psutil has no protocol counter or netfilter tables, so those operations
are not implemented here.
"""

from __future__ import annotations

import socket
import sys

import psutil
from loguru import logger

from hostnet.exceptions import NotImplementedProbeError, ProbeFailure
from hostnet.kinds import tables_for
from hostnet.models.connection import Addr, ConnectionStat
from hostnet.models.counters import IOCountersStat, ProtoCountersStat
from hostnet.models.filter import FilterStat
from hostnet.models.interface import InterfaceAddr, InterfaceStat
from hostnet.probes._util import FLAG_NAMES, interface_addrs
from hostnet.probes.base import BaseProbe
from hostnet.probes.registry import register_probe

# psutil flag spelling -> canonical flag name
_PSUTIL_FLAGS = {
    "up": "up",
    "broadcast": "broadcast",
    "loopback": "loopback",
    "pointopoint": "pointtopoint",
    "multicast": "multicast",
    "running": "running",
}


def _flags(stats) -> list[str]:
    present = {_PSUTIL_FLAGS[f] for f in (stats.flags or "").split(",") if f in _PSUTIL_FLAGS}
    if stats.isup:
        present.add("up")
    return [f for f in FLAG_NAMES if f in present]


def _if_index(name: str) -> int:
    try:
        return socket.if_nametoindex(name)
    except OSError:
        return 0


def _hardware_addrs() -> dict[str, str]:
    result: dict[str, str] = {}
    for name, entries in psutil.net_if_addrs().items():
        for entry in entries:
            if entry.family != psutil.AF_LINK:
                continue
            mac = entry.address.replace("-", ":").lower()
            if mac.replace(":", "").strip("0"):
                result[name] = mac
            break
    return result


def _endpoint(value) -> Addr:
    """Convert a psutil ``laddr``/``raddr``: an ``(ip, port)`` pair, a unix path or empty."""
    if not value:
        return Addr()
    if isinstance(value, str):
        return Addr(ip=value)
    return Addr(ip=value.ip, port=value.port)


def connection_from_psutil(conn) -> ConnectionStat:
    """Map one ``psutil.net_connections`` entry onto a ConnectionStat."""
    return ConnectionStat(
        fd=max(conn.fd, 0),
        family=int(conn.family),
        type=int(conn.type),
        laddr=_endpoint(conn.laddr),
        raddr=_endpoint(conn.raddr),
        status="" if conn.status == psutil.CONN_NONE else conn.status,
        pid=conn.pid or 0,
    )


@register_probe("portable")
class PortableProbe(BaseProbe):
    """Network snapshots from psutil's cross-platform API."""

    def __init__(self, platform: str | None = None) -> None:
        self.platform = platform or sys.platform

    def io_counters(self, pernic: bool) -> list[IOCountersStat]:
        try:
            counters = psutil.net_io_counters(pernic=True)
        except (psutil.Error, OSError) as e:
            raise ProbeFailure(f"Cannot read interface counters: {e}", cause=e, source="net_io_counters") from e
        stats = [
            IOCountersStat(
                name=name,
                bytes_sent=io.bytes_sent,
                bytes_recv=io.bytes_recv,
                packets_sent=io.packets_sent,
                packets_recv=io.packets_recv,
                errin=io.errin,
                errout=io.errout,
                dropin=io.dropin,
                dropout=io.dropout,
            )
            for name, io in counters.items()
        ]
        logger.debug(f"net_io_counters: {len(stats)} interfaces")
        return stats

    def interfaces(self) -> list[InterfaceStat]:
        addrs_by_name = interface_addrs()
        try:
            if_stats = psutil.net_if_stats()
            hwaddrs = _hardware_addrs()
        except (psutil.Error, OSError) as e:
            raise ProbeFailure(f"Cannot list interfaces: {e}", cause=e, source="net_if_stats") from e
        result = [
            InterfaceStat(
                index=_if_index(name),
                mtu=st.mtu,
                name=name,
                hardware_addr=hwaddrs.get(name, ""),
                flags=_flags(st),
                addrs=[InterfaceAddr(addr=a) for a in addrs_by_name.get(name, [])],
            )
            for name, st in if_stats.items()
        ]
        logger.debug(f"net_if_stats: {len(result)} interfaces")
        return result

    def proto_counters(self, protocols: list[str] | None) -> list[ProtoCountersStat]:
        raise NotImplementedProbeError("proto_counters", self.platform)

    def connections(self, kind: str) -> list[ConnectionStat]:
        tables_for(kind)
        try:
            conns = psutil.net_connections(kind=kind.lower())
        except (psutil.Error, OSError) as e:
            # AccessDenied without root on macOS
            raise ProbeFailure(f"Cannot list {kind} connections: {e}", cause=e, source="net_connections") from e
        result = [connection_from_psutil(c) for c in conns]
        logger.debug(f"connections({kind}): {len(result)} sockets")
        return result

    def filter_counters(self) -> list[FilterStat]:
        raise NotImplementedProbeError("filter_counters", self.platform)
