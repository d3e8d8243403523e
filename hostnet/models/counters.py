"""Interface I/O and per-protocol counter models."""

from __future__ import annotations

from pydantic import Field, NonNegativeInt, field_serializer

from hostnet.models._base import SnapshotModel


class IOCountersStat(SnapshotModel):
    """Cumulative I/O counters of one interface, or of all of them (``name == "all"``)."""

    name: str
    bytes_sent: NonNegativeInt = Field(default=0, alias="bytesSent")
    bytes_recv: NonNegativeInt = Field(default=0, alias="bytesRecv")
    packets_sent: NonNegativeInt = Field(default=0, alias="packetsSent")
    packets_recv: NonNegativeInt = Field(default=0, alias="packetsRecv")
    errin: NonNegativeInt = 0
    errout: NonNegativeInt = 0
    dropin: NonNegativeInt = 0
    dropout: NonNegativeInt = 0
    fifoin: NonNegativeInt = 0
    fifoout: NonNegativeInt = 0


class ProtoCountersStat(SnapshotModel):
    """Named counters of one protocol.

    Values are signed: some counters use ``-1`` for "unlimited" (e.g. TCP
    ``MaxConn``), which is a valid reading and not an error.
    """

    protocol: str
    stats: dict[str, int] = Field(default_factory=dict)

    @field_serializer("stats")
    def serialize_stats(self, stats: dict[str, int]) -> dict[str, int]:
        return dict(sorted(stats.items()))
