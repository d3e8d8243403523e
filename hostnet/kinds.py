"""Connection kinds: which socket tables a ``connections(kind)`` query covers."""

from __future__ import annotations

import socket
from dataclasses import dataclass

from hostnet.exceptions import InvalidKindError

AF_UNIX = getattr(socket, "AF_UNIX", 1)


@dataclass(frozen=True)
class SocketTable:
    """One kernel socket table together with the family/type of its sockets."""

    name: str
    family: int
    type: int


TCP4 = SocketTable("tcp", socket.AF_INET, socket.SOCK_STREAM)
TCP6 = SocketTable("tcp6", socket.AF_INET6, socket.SOCK_STREAM)
UDP4 = SocketTable("udp", socket.AF_INET, socket.SOCK_DGRAM)
UDP6 = SocketTable("udp6", socket.AF_INET6, socket.SOCK_DGRAM)
UNIX = SocketTable("unix", AF_UNIX, 0)

CONNECTION_KINDS: dict[str, tuple[SocketTable, ...]] = {
    "all": (TCP4, TCP6, UDP4, UDP6, UNIX),
    "tcp": (TCP4, TCP6),
    "tcp4": (TCP4,),
    "tcp6": (TCP6,),
    "udp": (UDP4, UDP6),
    "udp4": (UDP4,),
    "udp6": (UDP6,),
    "unix": (UNIX,),
    "inet": (TCP4, TCP6, UDP4, UDP6),
    "inet4": (TCP4, UDP4),
    "inet6": (TCP6, UDP6),
}


def list_kinds() -> list[str]:
    """Return a sorted list of the supported connection kinds."""
    return sorted(CONNECTION_KINDS.keys())


def tables_for(kind: str) -> tuple[SocketTable, ...]:
    """Resolve ``kind`` to its socket tables.

    Raises:
        InvalidKindError: If ``kind`` is not a known connection kind.
    """
    try:
        return CONNECTION_KINDS[kind.lower()]
    except KeyError:
        raise InvalidKindError(kind, list_kinds()) from None
