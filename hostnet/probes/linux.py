"""Linux probe backed by procfs and sysfs."""

from __future__ import annotations

import ipaddress
import os
import socket
import struct

from loguru import logger

from hostnet import config
from hostnet.exceptions import ProbeFailure
from hostnet.kinds import AF_UNIX, SocketTable, tables_for
from hostnet.models.connection import Addr, ConnectionStat
from hostnet.models.counters import IOCountersStat, ProtoCountersStat
from hostnet.models.filter import ConntrackStat, FilterStat
from hostnet.models.interface import InterfaceAddr, InterfaceStat
from hostnet.probes._util import flags_from_bits, interface_addrs, read_int, read_lines, read_text
from hostnet.probes.base import BaseProbe
from hostnet.probes.registry import register_probe

# Kernel TCP states as printed in /proc/net/tcp{,6}
TCP_STATES: dict[str, str] = {
    "01": "ESTABLISHED",
    "02": "SYN_SENT",
    "03": "SYN_RECV",
    "04": "FIN_WAIT1",
    "05": "FIN_WAIT2",
    "06": "TIME_WAIT",
    "07": "CLOSE",
    "08": "CLOSE_WAIT",
    "09": "LAST_ACK",
    "0A": "LISTEN",
    "0B": "CLOSING",
}

# /proc/net/dev column -> IOCountersStat field
_NET_DEV_COLUMNS: dict[int, str] = {
    0: "bytes_recv",
    1: "packets_recv",
    2: "errin",
    3: "dropin",
    4: "fifoin",
    8: "bytes_sent",
    9: "packets_sent",
    10: "errout",
    11: "dropout",
    12: "fifoout",
}
_NET_DEV_NUM_STATS = 16


def decode_address(family: int, value: str) -> Addr:
    """Decode a ``HEXADDR:HEXPORT`` pair from a /proc/net socket table.

    The kernel prints each 32-bit word of the address in host byte order.
    """
    host, sep, port = value.partition(":")
    if not sep:
        raise ValueError(f"malformed socket address {value!r}")
    if family == socket.AF_INET:
        if len(host) != 8:
            raise ValueError(f"malformed IPv4 address {host!r}")
        ip = str(ipaddress.IPv4Address(struct.pack("=I", int(host, 16))))
    elif family == socket.AF_INET6:
        if len(host) != 32:
            raise ValueError(f"malformed IPv6 address {host!r}")
        raw = b"".join(struct.pack("=I", int(host[i : i + 8], 16)) for i in range(0, 32, 8))
        ip = str(ipaddress.IPv6Address(raw))
    else:
        raise ValueError(f"unsupported address family {family}")
    return Addr(ip=ip, port=int(port, 16))


def parse_net_dev(lines: list[str], source: str = "") -> list[IOCountersStat]:
    """Parse the contents of a ``net/dev`` file, two header lines included."""
    stats: list[IOCountersStat] = []
    for line in lines[2:]:
        name, sep, data = line.partition(":")
        if not sep:
            continue
        fields = data.split()
        if len(fields) < _NET_DEV_NUM_STATS:
            raise ProbeFailure(f"Malformed line in {source}: {line!r}", source=source)
        try:
            values = {field: int(fields[col]) for col, field in _NET_DEV_COLUMNS.items()}
        except ValueError as e:
            raise ProbeFailure(f"Malformed counter in {source}: {line!r}", cause=e, source=source) from e
        stats.append(IOCountersStat(name=name.strip(), **values))
    return stats


def parse_snmp(lines: list[str], protocols: list[str] | None, source: str = "") -> list[ProtoCountersStat]:
    """Parse ``net/snmp`` header/value line pairs into protocol counters."""
    wanted = {p.lower() for p in protocols} if protocols else None
    content = [line for line in lines if line.strip()]
    if len(content) % 2:
        raise ProbeFailure(f"Odd number of lines in {source}", source=source)

    result: list[ProtoCountersStat] = []
    for header, values in zip(content[::2], content[1::2]):
        proto, _, names = header.partition(":")
        value_proto, _, numbers = values.partition(":")
        if proto != value_proto:
            raise ProbeFailure(f"Mismatched sections {proto!r}/{value_proto!r} in {source}", source=source)
        protocol = proto.strip().lower()
        if wanted is not None and protocol not in wanted:
            continue
        keys = names.split()
        try:
            counts = [int(v) for v in numbers.split()]
        except ValueError as e:
            raise ProbeFailure(f"Malformed {proto} counters in {source}", cause=e, source=source) from e
        if len(keys) != len(counts):
            raise ProbeFailure(f"{proto} has {len(keys)} names but {len(counts)} values in {source}", source=source)
        result.append(ProtoCountersStat(protocol=protocol, stats=dict(zip(keys, counts))))
    return result


def parse_inet_table(lines: list[str], table: SocketTable, source: str = "") -> list[ConnectionStat]:
    """Parse a ``net/tcp``-style socket table."""
    conns: list[ConnectionStat] = []
    for line in lines[1:]:
        fields = line.split()
        if len(fields) < 10:
            continue
        try:
            laddr = decode_address(table.family, fields[1])
            raddr = decode_address(table.family, fields[2])
            uid = int(fields[7])
        except ValueError as e:
            raise ProbeFailure(f"Malformed socket entry in {source}: {line!r}", cause=e, source=source) from e
        status = TCP_STATES.get(fields[3].upper(), "") if table.type == socket.SOCK_STREAM else ""
        conns.append(
            ConnectionStat(
                family=table.family,
                type=table.type,
                laddr=laddr,
                raddr=raddr,
                status=status,
                uids=(uid,),
            )
        )
    return conns


def parse_unix_table(lines: list[str], source: str = "") -> list[ConnectionStat]:
    """Parse ``net/unix``; the socket path (if bound) becomes the local address.

    The path is the rest of the row and may contain spaces.
    """
    conns: list[ConnectionStat] = []
    for line in lines[1:]:
        fields = line.split(maxsplit=7)
        if len(fields) < 7:
            continue
        try:
            sock_type = int(fields[4], 16)
        except ValueError as e:
            raise ProbeFailure(f"Malformed unix socket entry in {source}: {line!r}", cause=e, source=source) from e
        path = fields[7] if len(fields) > 7 else ""
        conns.append(ConnectionStat(family=AF_UNIX, type=sock_type, laddr=Addr(ip=path)))
    return conns


def parse_conntrack(lines: list[str], source: str = "") -> list[ConntrackStat]:
    """Parse per-CPU rows of ``net/stat/nf_conntrack`` (hex values)."""
    if not lines:
        return []
    known = ConntrackStat.model_fields
    columns = lines[0].split()
    result: list[ConntrackStat] = []
    for line in lines[1:]:
        fields = line.split()
        if not fields:
            continue
        if len(fields) != len(columns):
            raise ProbeFailure(f"Malformed conntrack row in {source}: {line!r}", source=source)
        try:
            values = {col: int(val, 16) for col, val in zip(columns, fields) if col in known}
        except ValueError as e:
            raise ProbeFailure(f"Malformed conntrack value in {source}", cause=e, source=source) from e
        result.append(ConntrackStat(**values))
    return result


@register_probe("linux")
class LinuxProbe(BaseProbe):
    """Network snapshots read from procfs/sysfs.

    ``proc_root`` and ``sys_root`` default to ``HOST_PROC`` / ``HOST_SYS``.
    """

    platform = "linux"

    def __init__(self, proc_root: str | None = None, sys_root: str | None = None) -> None:
        self._proc_root = proc_root
        self._sys_root = sys_root

    def _proc(self, *parts: str) -> str:
        if self._proc_root is not None:
            return os.path.join(self._proc_root, *parts)
        return config.host_proc(*parts)

    def _sys(self, *parts: str) -> str:
        if self._sys_root is not None:
            return os.path.join(self._sys_root, *parts)
        return config.host_sys(*parts)

    # ── I/O counters ─────────────────────────────────────────────────

    def io_counters(self, pernic: bool) -> list[IOCountersStat]:
        return self.io_counters_by_file(self._proc("net", "dev"))

    def io_counters_by_file(self, path: str) -> list[IOCountersStat]:
        """Per-interface counters parsed from an arbitrary ``net/dev`` file."""
        stats = parse_net_dev(read_lines(path), source=path)
        logger.debug(f"{path}: {len(stats)} interfaces")
        return stats

    # ── interfaces ───────────────────────────────────────────────────

    def interfaces(self) -> list[InterfaceStat]:
        """Interfaces from sysfs, with every assigned address from ``psutil.net_if_addrs``."""
        class_net = self._sys("class", "net")
        try:
            names = os.listdir(class_net)
        except OSError as e:
            raise ProbeFailure(f"Cannot list {class_net}: {e}", cause=e, source=class_net) from e

        addrs_by_name = interface_addrs()
        result: list[InterfaceStat] = []
        for name in names:
            base = os.path.join(class_net, name)
            if not os.path.isdir(base):
                continue
            result.append(
                InterfaceStat(
                    index=read_int(os.path.join(base, "ifindex")),
                    mtu=read_int(os.path.join(base, "mtu")),
                    name=name,
                    hardware_addr=self._hardware_addr(base),
                    flags=flags_from_bits(read_int(os.path.join(base, "flags"), base=16)),
                    addrs=[InterfaceAddr(addr=a) for a in addrs_by_name.get(name, [])],
                )
            )
        result.sort(key=lambda iface: iface.index)
        logger.debug(f"{class_net}: {len(result)} interfaces")
        return result

    @staticmethod
    def _hardware_addr(base: str) -> str:
        path = os.path.join(base, "address")
        if not os.path.exists(path):
            return ""
        hwaddr = read_text(path)
        # all-zero addresses (loopback, tunnels) count as none
        if not hwaddr.replace(":", "").strip("0"):
            return ""
        return hwaddr

    # ── protocol counters ────────────────────────────────────────────

    def proto_counters(self, protocols: list[str] | None) -> list[ProtoCountersStat]:
        path = self._proc("net", "snmp")
        return parse_snmp(read_lines(path), protocols, source=path)

    # ── connections ──────────────────────────────────────────────────

    def connections(self, kind: str) -> list[ConnectionStat]:
        conns: list[ConnectionStat] = []
        for table in tables_for(kind):
            path = self._proc("net", table.name)
            if table.family == socket.AF_INET6 and not os.path.exists(path):
                logger.debug(f"{path} missing, IPv6 disabled")
                continue
            lines = read_lines(path)
            if table.family == AF_UNIX:
                conns.extend(parse_unix_table(lines, source=path))
            else:
                conns.extend(parse_inet_table(lines, table, source=path))
        logger.debug(f"connections({kind}): {len(conns)} sockets")
        return conns

    # ── netfilter ────────────────────────────────────────────────────

    def filter_counters(self) -> list[FilterStat]:
        count = read_int(self._proc("sys", "net", "netfilter", "nf_conntrack_count"))
        maximum = read_int(self._proc("sys", "net", "netfilter", "nf_conntrack_max"))
        return [FilterStat(conn_track_count=count, conn_track_max=maximum)]

    def conntrack_stats(self, percpu: bool) -> list[ConntrackStat]:
        path = self._proc("net", "stat", "nf_conntrack")
        return parse_conntrack(read_lines(path), source=path)
