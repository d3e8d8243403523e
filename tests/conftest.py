"""Shared fixtures for the hostnet test suite."""

from __future__ import annotations

import socket
from collections import namedtuple
from pathlib import Path

import psutil
import pytest

from hostnet.models import (
    ConnectionStat,
    ConntrackStat,
    FilterStat,
    InterfaceStat,
    IOCountersStat,
    ProtoCountersStat,
)
from hostnet.probes.base import BaseProbe
from hostnet.probes.linux import LinuxProbe

# ── fake procfs / sysfs content ───────────────────────────────────────

NET_DEV = """\
Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo:    1000      10    0    0    0     0          0         0     1000      10    0    0    0     0       0          0
  eth0:   50000     400    1    2    3     0          0         5    20000     300    4    5    6     0       0          0
"""

NET_SNMP = """\
Ip: Forwarding DefaultTTL InReceives
Ip: 1 64 1234
Icmp: InMsgs InErrors
Icmp: 5 0
Tcp: RtoAlgorithm RtoMin RtoMax MaxConn ActiveOpens PassiveOpens
Tcp: 1 200 120000 -1 4000 3000
Udp: InDatagrams NoPorts
Udp: 100 2
"""

NET_TCP = """\
  sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode
   0: 0100007F:0277 00000000:0000 0A 00000000:00000000 00:00000000 00000000     0        0 12345 1 0000000000000000 100 0 0 10 0
   1: 0F02000A:C350 2200A8C0:01BB 01 00000000:00000000 00:00000000 00000000  1000        0 23456 1 0000000000000000 20 4 30 10 -1
"""

NET_TCP6 = """\
  sl  local_address                         remote_address                        st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode
   0: 00000000000000000000000001000000:0016 00000000000000000000000000000000:0000 0A 00000000:00000000 00:00000000 00000000     0        0 3456 1 0000000000000000 100 0 0 10 0
"""

NET_UDP = """\
   sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode ref pointer drops
  1: 00000000:0044 00000000:0000 07 00000000:00000000 00:00000000 00000000   101        0 4567 2 0000000000000000 0
"""

NET_UDP6 = """\
  sl  local_address                         remote_address                        st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode ref pointer drops
"""

NET_UNIX = """\
Num       RefCount Protocol Flags    Type St Inode Path
0000000000000000: 00000002 00000000 00010000 0001 01 20123 /run/systemd/notify
0000000000000000: 00000003 00000000 00000000 0002 03 20124
"""

NF_CONNTRACK_STAT = """\
entries  searched found new invalid ignore delete delete_list insert insert_failed drop early_drop icmp_error  expect_new expect_create expect_delete search_restart
00000010  00000000 00000000 00000000 00000005 00000020 00000000 00000000 00000000 00000000 00000000 00000000 00000000  00000000 00000000 00000000 00000001
00000010  00000000 00000000 00000000 00000003 00000010 00000000 00000000 00000000 00000000 00000000 00000000 00000000  00000000 00000000 00000000 00000002
"""

SYS_INTERFACES = {
    # name: (ifindex, mtu, address, flags)
    "eth0": ("2", "1500", "52:54:00:12:34:56", "0x1003"),
    "lo": ("1", "65536", "00:00:00:00:00:00", "0x9"),
}

# shaped like psutil.net_if_addrs() entries
IfAddr = namedtuple("IfAddr", ["family", "address", "netmask", "broadcast", "ptp"])

IF_ADDRS = {
    "lo": [
        IfAddr(socket.AF_INET, "127.0.0.1", "255.0.0.0", None, None),
        IfAddr(socket.AF_INET6, "::1", "ffff:ffff:ffff:ffff:ffff:ffff:ffff:ffff", None, None),
    ],
    "eth0": [
        IfAddr(psutil.AF_LINK, "52:54:00:12:34:56", None, "ff:ff:ff:ff:ff:ff", None),
        IfAddr(socket.AF_INET, "10.0.2.15", "255.255.255.0", "10.0.2.255", None),
        IfAddr(socket.AF_INET6, "fe80::211:22ff:fe33:4455%eth0", "ffff:ffff:ffff:ffff::", None, None),
    ],
}


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


@pytest.fixture()
def fake_proc(tmp_path: Path) -> Path:
    """A procfs tree holding the network files the linux probe reads."""
    root = tmp_path / "proc"
    _write(root / "net" / "dev", NET_DEV)
    _write(root / "net" / "snmp", NET_SNMP)
    _write(root / "net" / "tcp", NET_TCP)
    _write(root / "net" / "tcp6", NET_TCP6)
    _write(root / "net" / "udp", NET_UDP)
    _write(root / "net" / "udp6", NET_UDP6)
    _write(root / "net" / "unix", NET_UNIX)
    _write(root / "net" / "stat" / "nf_conntrack", NF_CONNTRACK_STAT)
    _write(root / "sys" / "net" / "netfilter" / "nf_conntrack_count", "42\n")
    _write(root / "sys" / "net" / "netfilter" / "nf_conntrack_max", "262144\n")
    return root


@pytest.fixture()
def fake_sys(tmp_path: Path) -> Path:
    """A sysfs tree with ``lo`` and ``eth0`` plus a non-interface file."""
    root = tmp_path / "sys"
    class_net = root / "class" / "net"
    for name, (ifindex, mtu, address, flags) in SYS_INTERFACES.items():
        _write(class_net / name / "ifindex", f"{ifindex}\n")
        _write(class_net / name / "mtu", f"{mtu}\n")
        _write(class_net / name / "address", f"{address}\n")
        _write(class_net / name / "flags", f"{flags}\n")
    _write(class_net / "bonding_masters", "\n")
    return root


@pytest.fixture()
def if_addrs(monkeypatch: pytest.MonkeyPatch) -> dict[str, list]:
    """A mutable copy of IF_ADDRS served by psutil.net_if_addrs."""
    table = {name: list(entries) for name, entries in IF_ADDRS.items()}
    monkeypatch.setattr(psutil, "net_if_addrs", lambda: table)
    return table


@pytest.fixture()
def linux_probe(fake_proc: Path, fake_sys: Path, if_addrs: dict[str, list]) -> LinuxProbe:
    """LinuxProbe bound to the fake trees and address table."""
    return LinuxProbe(proc_root=str(fake_proc), sys_root=str(fake_sys))


# ── in-memory probe ───────────────────────────────────────────────────


class FakeProbe(BaseProbe):
    """Probe returning canned rows and recording the arguments it was called with."""

    platform = "fake"

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []
        self.io = [
            IOCountersStat(name="eth0", bytes_recv=10, packets_recv=10),
            IOCountersStat(name="eth1", bytes_recv=10, packets_recv=10, errin=10),
        ]
        self.ifaces = [InterfaceStat(index=1, mtu=1500, name="eth0")]
        self.protos = [
            ProtoCountersStat(protocol="tcp", stats={"ActiveOpens": 1}),
            ProtoCountersStat(protocol="udp", stats={"InDatagrams": 2}),
        ]
        self.conns = [ConnectionStat(family=2, type=1, status="LISTEN")]
        self.filters = [FilterStat(conn_track_count=1, conn_track_max=65536)]
        self.conntrack = [ConntrackStat(entries=1, found=2), ConntrackStat(entries=3, found=4)]

    def io_counters(self, pernic):
        self.calls.append(("io_counters", pernic))
        return list(self.io)

    def interfaces(self):
        self.calls.append(("interfaces", None))
        return list(self.ifaces)

    def proto_counters(self, protocols):
        self.calls.append(("proto_counters", protocols))
        if not protocols:
            return list(self.protos)
        return [p for p in self.protos if p.protocol in protocols]

    def connections(self, kind):
        self.calls.append(("connections", kind))
        return list(self.conns)

    def filter_counters(self):
        self.calls.append(("filter_counters", None))
        return list(self.filters)

    def conntrack_stats(self, percpu):
        self.calls.append(("conntrack_stats", percpu))
        return list(self.conntrack)


@pytest.fixture()
def fake_probe() -> FakeProbe:
    return FakeProbe()
