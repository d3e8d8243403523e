"""Platform-independent host network snapshots.

Provides interface I/O counters, interfaces and their addresses, protocol
counters, active connections and connection-tracking counters with the same
data shapes on every operating system.
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink and enable this package's log output."""
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "DEBUG")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"skiplog": False})
    glogger.enable(__name__)


from hostnet.aggregate import sum_conntrack_stats, sum_io_counters  # noqa: E402
from hostnet.api import (  # noqa: E402
    NetSnapshot,
    connections,
    conntrack_stats,
    default_snapshot,
    filter_counters,
    interfaces,
    io_counters,
    proto_counters,
)
from hostnet.exceptions import (  # noqa: E402
    HostNetError,
    InvalidArgumentError,
    InvalidKindError,
    NotImplementedProbeError,
    ProbeFailure,
)
from hostnet.kinds import list_kinds  # noqa: E402
from hostnet.models import (  # noqa: E402
    Addr,
    ConnectionStat,
    ConntrackStat,
    FilterStat,
    InterfaceAddr,
    InterfaceStat,
    IOCountersStat,
    ProtoCountersStat,
)
from hostnet.probes import BaseProbe, create_probe, list_probes  # noqa: E402
from hostnet.serialization import render, to_dict, to_json  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "NetSnapshot",
    "default_snapshot",
    "io_counters",
    "interfaces",
    "proto_counters",
    "connections",
    "filter_counters",
    "conntrack_stats",
    "sum_io_counters",
    "sum_conntrack_stats",
    "list_kinds",
    "BaseProbe",
    "create_probe",
    "list_probes",
    "render",
    "to_dict",
    "to_json",
    "Addr",
    "ConnectionStat",
    "ConntrackStat",
    "FilterStat",
    "InterfaceAddr",
    "InterfaceStat",
    "IOCountersStat",
    "ProtoCountersStat",
    "HostNetError",
    "NotImplementedProbeError",
    "ProbeFailure",
    "InvalidArgumentError",
    "InvalidKindError",
]
