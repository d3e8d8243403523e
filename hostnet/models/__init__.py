"""Canonical data models shared by every platform probe."""

from hostnet.models.connection import Addr, ConnectionStat
from hostnet.models.counters import IOCountersStat, ProtoCountersStat
from hostnet.models.filter import ConntrackStat, FilterStat
from hostnet.models.interface import InterfaceAddr, InterfaceStat

__all__ = [
    "Addr",
    "ConnectionStat",
    "IOCountersStat",
    "ProtoCountersStat",
    "FilterStat",
    "ConntrackStat",
    "InterfaceAddr",
    "InterfaceStat",
]
