"""Fallback probe for platforms without a backend."""

from __future__ import annotations

import sys

from hostnet.exceptions import NotImplementedProbeError
from hostnet.models.connection import ConnectionStat
from hostnet.models.counters import IOCountersStat, ProtoCountersStat
from hostnet.models.filter import FilterStat
from hostnet.models.interface import InterfaceStat
from hostnet.probes.base import BaseProbe
from hostnet.probes.registry import UNSUPPORTED, register_probe


@register_probe(UNSUPPORTED)
class UnsupportedProbe(BaseProbe):
    """Every operation raises ``NotImplementedProbeError``."""

    def __init__(self, platform: str | None = None) -> None:
        self.platform = platform or sys.platform

    def io_counters(self, pernic: bool) -> list[IOCountersStat]:
        raise NotImplementedProbeError("io_counters", self.platform)

    def interfaces(self) -> list[InterfaceStat]:
        raise NotImplementedProbeError("interfaces", self.platform)

    def proto_counters(self, protocols: list[str] | None) -> list[ProtoCountersStat]:
        raise NotImplementedProbeError("proto_counters", self.platform)

    def connections(self, kind: str) -> list[ConnectionStat]:
        raise NotImplementedProbeError("connections", self.platform)

    def filter_counters(self) -> list[FilterStat]:
        raise NotImplementedProbeError("filter_counters", self.platform)
