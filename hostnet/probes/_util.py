"""Shared helpers for reading OS sources inside probes."""

from __future__ import annotations

import ipaddress
import socket

import psutil
from loguru import logger

from hostnet.exceptions import ProbeFailure

# Interface flag names in canonical order, with their Linux IFF_* bits.
FLAG_BITS: tuple[tuple[str, int], ...] = (
    ("up", 0x1),
    ("broadcast", 0x2),
    ("loopback", 0x8),
    ("pointtopoint", 0x10),
    ("multicast", 0x1000),
    ("running", 0x40),
)
FLAG_NAMES: tuple[str, ...] = tuple(name for name, _ in FLAG_BITS)


def flags_from_bits(bits: int) -> list[str]:
    """Decode an ``IFF_*`` bit mask into canonical flag names."""
    return [name for name, bit in FLAG_BITS if bits & bit]


def read_lines(path: str) -> list[str]:
    """Return the lines of ``path`` without trailing newlines.

    Undecodable bytes (socket paths are arbitrary bytes) come back as
    ``\\xNN`` escapes instead of failing the whole read.
    """
    try:
        with open(path, encoding="utf-8", errors="backslashreplace") as f:
            return f.read().splitlines()
    except OSError as e:
        raise ProbeFailure(f"Cannot read {path}: {e}", cause=e, source=path) from e


def read_text(path: str) -> str:
    return "\n".join(read_lines(path)).strip()


def read_int(path: str, base: int = 10) -> int:
    """Read a file holding a single integer."""
    text = read_text(path)
    try:
        return int(text, base)
    except ValueError as e:
        raise ProbeFailure(f"Malformed integer in {path}: {text!r}", cause=e, source=path) from e


def _cidr(address: str, netmask: str | None) -> str:
    # strip %scope from link-local IPv6 addresses
    address = address.split("%")[0]
    if not netmask:
        return address
    prefix = bin(int(ipaddress.ip_address(netmask.split("%")[0]))).count("1")
    return f"{address}/{prefix}"


def interface_addrs() -> dict[str, list[str]]:
    """IPv4 and IPv6 addresses of every interface, in CIDR form where the netmask is known.

    Every assigned address is listed (secondary and alias addresses included),
    in the order the OS reports them.

    Raises:
        ProbeFailure: If the address table cannot be read.
    """
    try:
        table = psutil.net_if_addrs()
    except (psutil.Error, OSError) as e:
        raise ProbeFailure(f"Cannot list interface addresses: {e}", cause=e, source="net_if_addrs") from e

    result: dict[str, list[str]] = {}
    for name, entries in table.items():
        addrs = result.setdefault(name, [])
        for entry in entries:
            if entry.family not in (socket.AF_INET, socket.AF_INET6):
                continue
            try:
                addrs.append(_cidr(entry.address, entry.netmask))
            except ValueError as e:
                raise ProbeFailure(
                    f"Malformed address {entry.address!r}/{entry.netmask!r} on {name}",
                    cause=e,
                    source="net_if_addrs",
                ) from e
    logger.debug(f"net_if_addrs: {sum(len(a) for a in result.values())} addresses on {len(result)} interfaces")
    return result
