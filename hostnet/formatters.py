"""Terminal table formatting of snapshot rows."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel
from tabulate import tabulate

from hostnet.models.connection import Addr, ConnectionStat
from hostnet.models.counters import ProtoCountersStat
from hostnet.models.interface import InterfaceStat
from hostnet.serialization import to_dict


def _addr_str(addr: Addr) -> str:
    if not addr.ip and not addr.port:
        return "-"
    if not addr.port:
        return addr.ip
    host = f"[{addr.ip}]" if ":" in addr.ip else addr.ip
    return f"{host}:{addr.port}"


def format_connections(conns: Sequence[ConnectionStat], tablefmt: str = "simple") -> str:
    rows = [
        [c.family, c.type, _addr_str(c.laddr), _addr_str(c.raddr), c.status or "-", ",".join(map(str, c.uids)), c.pid]
        for c in conns
    ]
    return tabulate(rows, headers=["family", "type", "local", "remote", "status", "uids", "pid"], tablefmt=tablefmt)


def format_interfaces(ifaces: Sequence[InterfaceStat], tablefmt: str = "simple") -> str:
    rows = [
        [i.index, i.name, i.mtu, i.hardware_addr or "-", ",".join(i.flags), "\n".join(a.addr for a in i.addrs)]
        for i in ifaces
    ]
    return tabulate(rows, headers=["index", "name", "mtu", "hardwareAddr", "flags", "addrs"], tablefmt=tablefmt)


def format_proto_counters(protos: Sequence[ProtoCountersStat], tablefmt: str = "simple") -> str:
    """One block per protocol, counters sorted by name."""
    blocks = []
    for p in protos:
        table = tabulate(sorted(p.stats.items()), headers=["counter", "value"], tablefmt=tablefmt)
        blocks.append(f"== {p.protocol} ==\n{table}")
    return "\n\n".join(blocks)


def format_rows(items: Sequence[BaseModel], tablefmt: str = "simple") -> str:
    """Generic table with one column per public field."""
    if not items:
        return "(no entries)"
    dicts = [to_dict(item) for item in items]
    return tabulate([list(d.values()) for d in dicts], headers=list(dicts[0].keys()), tablefmt=tablefmt)


def format_table(items: Sequence[BaseModel], tablefmt: str = "simple") -> str:
    """Pick a table layout suited to the row type."""
    if items and isinstance(items[0], ConnectionStat):
        return format_connections(items, tablefmt)  # type: ignore[arg-type]
    if items and isinstance(items[0], InterfaceStat):
        return format_interfaces(items, tablefmt)  # type: ignore[arg-type]
    if items and isinstance(items[0], ProtoCountersStat):
        return format_proto_counters(items, tablefmt)  # type: ignore[arg-type]
    return format_rows(items, tablefmt)
