"""Probe registry and factory for platform probe creation."""

from __future__ import annotations

import sys
from typing import Any, Callable

from loguru import logger

from hostnet.probes.base import BaseProbe

_PROBE_REGISTRY: dict[str, type[BaseProbe]] = {}

UNSUPPORTED = "unsupported"

# sys.platform prefixes psutil supports
_PSUTIL_PLATFORMS = ("darwin", "win32", "freebsd", "openbsd", "netbsd", "sunos", "aix")


def register_probe(name: str) -> Callable[[type[BaseProbe]], type[BaseProbe]]:
    """Decorator to register a platform probe class.

    Usage::

        @register_probe("linux")
        class LinuxProbe(BaseProbe):
            ...
    """

    def decorator(cls: type[BaseProbe]) -> type[BaseProbe]:
        _PROBE_REGISTRY[name.lower()] = cls
        return cls

    return decorator


def platform_probe_name(platform: str | None = None) -> str:
    """Map a ``sys.platform`` value to the name of the probe serving it."""
    plat = (platform or sys.platform).lower()
    if plat.startswith("linux"):
        return "linux"
    if plat.startswith(_PSUTIL_PLATFORMS):
        return "portable"
    return UNSUPPORTED


def create_probe(name: str | None = None, **kwargs: Any) -> BaseProbe:
    """Create the probe registered under ``name``.

    Args:
        name: Probe name (e.g. "linux", "portable"). Defaults to the probe for
            the running platform.
        **kwargs: Probe-specific keyword arguments.

    Raises:
        ValueError: If no probe is registered under ``name``.
    """
    if name is None:
        name = platform_probe_name()
    name_lower = name.lower()
    if name_lower not in _PROBE_REGISTRY:
        available = ", ".join(sorted(_PROBE_REGISTRY.keys()))
        raise ValueError(f"Unknown probe '{name}'. Available: {available}")

    cls = _PROBE_REGISTRY[name_lower]
    logger.debug(f"Using {cls.__name__} for platform {sys.platform}")
    return cls(**kwargs)


def list_probes() -> list[str]:
    """Return a sorted list of registered probe names."""
    return sorted(_PROBE_REGISTRY.keys())
