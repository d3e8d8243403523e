"""Network interface data models."""

from __future__ import annotations

from pydantic import Field

from hostnet.models._base import SnapshotModel


class InterfaceAddr(SnapshotModel):
    """An address assigned to an interface, CIDR notation when the prefix is known."""

    addr: str


class InterfaceStat(SnapshotModel):
    """A configured network interface."""

    index: int = Field(default=0, ge=0)
    mtu: int = Field(default=0, ge=0)
    name: str = Field(min_length=1)
    hardware_addr: str = Field(default="", alias="hardwareAddr")
    flags: tuple[str, ...] = ()
    addrs: tuple[InterfaceAddr, ...] = ()
