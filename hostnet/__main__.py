"""Diagnostics CLI: print one snapshot of host network state.

Sub-commands:
  io           Interface I/O counters (summed, or per interface with --pernic)
  interfaces   Configured interfaces and their addresses
  proto        Protocol counters (all, or the given protocols)
  connections  Sockets of a connection kind (default: inet)
  filter       Connection tracking count / maximum
  conntrack    Conntrack statistics (summed, or per CPU with --percpu)

Examples:
  hostnet io --pernic
  hostnet proto tcp udp --json
  hostnet connections --kind tcp6
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from pydantic import BaseModel

from hostnet import __version__, configure_logging
from hostnet import glogger
from hostnet.api import NetSnapshot, default_snapshot
from hostnet.exceptions import InvalidKindError, NotImplementedProbeError, ProbeFailure
from hostnet.formatters import format_table
from hostnet.kinds import list_kinds
from hostnet.serialization import to_json


def cmd_io(snap: NetSnapshot, args: argparse.Namespace) -> Sequence[BaseModel]:
    return snap.io_counters(pernic=args.pernic)


def cmd_interfaces(snap: NetSnapshot, args: argparse.Namespace) -> Sequence[BaseModel]:
    return snap.interfaces()


def cmd_proto(snap: NetSnapshot, args: argparse.Namespace) -> Sequence[BaseModel]:
    return snap.proto_counters(args.protocols or None)


def cmd_connections(snap: NetSnapshot, args: argparse.Namespace) -> Sequence[BaseModel]:
    return snap.connections(args.kind)


def cmd_filter(snap: NetSnapshot, args: argparse.Namespace) -> Sequence[BaseModel]:
    return snap.filter_counters()


def cmd_conntrack(snap: NetSnapshot, args: argparse.Namespace) -> Sequence[BaseModel]:
    return snap.conntrack_stats(percpu=args.percpu)


COMMANDS = {
    "io": cmd_io,
    "interfaces": cmd_interfaces,
    "proto": cmd_proto,
    "connections": cmd_connections,
    "filter": cmd_filter,
    "conntrack": cmd_conntrack,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the diagnostics CLI."""
    parser = argparse.ArgumentParser(
        prog="hostnet",
        description="Point-in-time snapshot of host network state",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument("--tablefmt", default="simple", help="tabulate table format (default: simple)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    io_parser = subparsers.add_parser("io", help="Interface I/O counters")
    io_parser.add_argument("--pernic", action="store_true", help="One row per interface")

    subparsers.add_parser("interfaces", help="Configured interfaces")

    proto_parser = subparsers.add_parser("proto", help="Protocol counters")
    proto_parser.add_argument("protocols", nargs="*", help="Protocols to show (default: all)")

    conn_parser = subparsers.add_parser("connections", help="Active connections")
    conn_parser.add_argument("--kind", default="inet", help=f"Connection kind: {', '.join(list_kinds())}")

    subparsers.add_parser("filter", help="Connection tracking counters")

    ct_parser = subparsers.add_parser("conntrack", help="Conntrack statistics")
    ct_parser.add_argument("--percpu", action="store_true", help="One row per CPU")

    return parser


def main(args: list[str] | None = None, snapshot: NetSnapshot | None = None) -> None:
    """Main entry point for the diagnostics CLI."""
    parser = build_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        sys.exit(1)

    if parsed.verbose:
        configure_logging()

    snap = snapshot if snapshot is not None else default_snapshot()
    try:
        items = COMMANDS[parsed.command](snap, parsed)
    except InvalidKindError as e:
        parser.error(str(e))
    except NotImplementedProbeError as e:
        print(f"hostnet: {e}", file=sys.stderr)
        sys.exit(2)
    except ProbeFailure as e:
        glogger.error(f"{parsed.command} failed: {e}")
        print(f"hostnet: {e}", file=sys.stderr)
        sys.exit(1)

    if parsed.json:
        print(to_json(items, indent=2))
    else:
        print(format_table(items, tablefmt=parsed.tablefmt))


if __name__ == "__main__":
    main()
