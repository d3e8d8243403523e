"""Folding per-interface / per-CPU counter rows into one summary row."""

from __future__ import annotations

from collections.abc import Iterable

from hostnet.models.counters import IOCountersStat
from hostnet.models.filter import ConntrackStat

ALL_INTERFACES = "all"

_IO_FIELDS = tuple(f for f in IOCountersStat.model_fields if f != "name")
_CONNTRACK_FIELDS = tuple(ConntrackStat.model_fields)


def sum_io_counters(stats: Iterable[IOCountersStat]) -> list[IOCountersStat]:
    """Sum every counter across ``stats`` into a single row named ``all``.

    Always returns exactly one row; an empty input yields an all-zero row.
    """
    totals = dict.fromkeys(_IO_FIELDS, 0)
    for stat in stats:
        for field in _IO_FIELDS:
            totals[field] += getattr(stat, field)
    return [IOCountersStat(name=ALL_INTERFACES, **totals)]


def sum_conntrack_stats(stats: Iterable[ConntrackStat]) -> list[ConntrackStat]:
    """Sum per-CPU conntrack rows into a single row."""
    totals = dict.fromkeys(_CONNTRACK_FIELDS, 0)
    for stat in stats:
        for field in _CONNTRACK_FIELDS:
            totals[field] += getattr(stat, field)
    return [ConntrackStat(**totals)]
