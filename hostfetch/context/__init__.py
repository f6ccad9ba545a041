"""Host access seam used by probes."""

from .system import CommandOutput, KernelIdentity, MockSystemContext, RealSystemContext, SystemContext

__all__ = [
    "CommandOutput",
    "KernelIdentity",
    "MockSystemContext",
    "RealSystemContext",
    "SystemContext",
]
