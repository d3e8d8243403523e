"""Environment-driven configuration.

Values are read at call time so that a changed environment (containers
mounting the host procfs elsewhere, tests pointing at a fixture tree) is
picked up without re-importing the package.
"""

from __future__ import annotations

import os

DEFAULT_PROC_ROOT = "/proc"
DEFAULT_SYS_ROOT = "/sys"


def proc_root() -> str:
    return os.getenv("HOST_PROC", DEFAULT_PROC_ROOT)


def sys_root() -> str:
    return os.getenv("HOST_SYS", DEFAULT_SYS_ROOT)


def host_proc(*parts: str) -> str:
    """Join ``parts`` below the configured procfs root."""
    return os.path.join(proc_root(), *parts)


def host_sys(*parts: str) -> str:
    """Join ``parts`` below the configured sysfs root."""
    return os.path.join(sys_root(), *parts)

