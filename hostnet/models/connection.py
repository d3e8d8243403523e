"""Connection endpoint and socket data models."""

from __future__ import annotations

from pydantic import Field

from hostnet.models._base import SnapshotModel


class Addr(SnapshotModel):
    """One endpoint of a connection or listener. Empty ``ip`` means host unknown."""

    ip: str = ""
    port: int = Field(default=0, ge=0, le=65535)


class ConnectionStat(SnapshotModel):
    """An active connection or listening socket.

    ``status`` is protocol specific (``ESTABLISHED``, ``LISTEN``, ...) and empty
    for protocols without a state machine. ``pid`` is 0 when the owning process
    is unknown.
    """

    fd: int = Field(default=0, ge=0)
    family: int = Field(default=0, ge=0)
    type: int = Field(default=0, ge=0)
    laddr: Addr = Field(default_factory=Addr, alias="localaddr")
    raddr: Addr = Field(default_factory=Addr, alias="remoteaddr")
    status: str = ""
    uids: tuple[int, ...] = ()
    pid: int = Field(default=0, ge=0)
