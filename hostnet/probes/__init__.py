"""Platform probes.

Importing this package triggers probe registration via @register_probe.
"""

import hostnet.probes.linux  # noqa: F401
import hostnet.probes.portable  # noqa: F401
import hostnet.probes.unsupported  # noqa: F401
from hostnet.probes.base import BaseProbe
from hostnet.probes.registry import create_probe, list_probes, platform_probe_name, register_probe

__all__ = [
    "BaseProbe",
    "create_probe",
    "list_probes",
    "platform_probe_name",
    "register_probe",
]
