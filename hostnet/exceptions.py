"""Exception hierarchy for host network snapshots."""

from __future__ import annotations


class HostNetError(Exception):
    """Base exception for all host network snapshot errors."""


class NotImplementedProbeError(HostNetError, NotImplementedError):
    """The current platform has no backend for the requested operation.

    This is an expected outcome, not a failure: callers usually skip the
    dependent metric.
    """

    def __init__(self, operation: str, platform: str = ""):
        self.operation = operation
        self.platform = platform
        where = f" on {platform}" if platform else ""
        super().__init__(f"{operation} is not implemented{where}")


class ProbeFailure(HostNetError):
    """The backend tried to read an OS source and the source failed."""

    def __init__(self, message: str, cause: BaseException | None = None, source: str = ""):
        self.cause = cause
        self.source = source
        super().__init__(message)


class InvalidArgumentError(HostNetError, ValueError):
    """Caller supplied a selector the snapshot API cannot service."""


class InvalidKindError(InvalidArgumentError):
    """Unrecognized connection kind."""

    def __init__(self, kind: str, available: list[str]):
        self.kind = kind
        self.available = available
        super().__init__(f"Unknown connection kind '{kind}'. Available: {', '.join(available)}")
