"""Host information probes and their registry."""
from typing import Union

from .base import (
    Category,
    Probe,
    UnknownCategory,
    all_categories,
    create_probe,
    discover_probes,
    parse_category,
)
from .cpu import CpuInfo, CpuProbe
from .host import HostInfo, HostProbe
from .kernel import KernelInfo, KernelProbe
from .memory import MemoryInfo, MemoryProbe, compute_used, format_bytes
from .operating_system import OsInfo, OsProbe
from .outcome import (
    DetectionFailedError,
    ErrorKind,
    OutcomeStatus,
    ParseFailureError,
    ProbeError,
    ProbeFailure,
    ProbeOutcome,
    UnsupportedPlatformError,
)
from .platforms import ARCH, CURRENT_PLATFORM, Platform
from .shell import ShellInfo, ShellProbe
from .uptime import UptimeInfo, UptimeProbe

CategoryInfo = Union[OsInfo, HostInfo, KernelInfo, UptimeInfo, ShellInfo, CpuInfo, MemoryInfo]

__all__ = [
    "ARCH",
    "CURRENT_PLATFORM",
    "Category",
    "CategoryInfo",
    "CpuInfo",
    "CpuProbe",
    "DetectionFailedError",
    "ErrorKind",
    "HostInfo",
    "HostProbe",
    "KernelInfo",
    "KernelProbe",
    "MemoryInfo",
    "MemoryProbe",
    "OsInfo",
    "OsProbe",
    "OutcomeStatus",
    "ParseFailureError",
    "Platform",
    "Probe",
    "ProbeError",
    "ProbeFailure",
    "ProbeOutcome",
    "ShellInfo",
    "ShellProbe",
    "UnknownCategory",
    "UnsupportedPlatformError",
    "UptimeInfo",
    "UptimeProbe",
    "all_categories",
    "compute_used",
    "create_probe",
    "discover_probes",
    "format_bytes",
    "parse_category",
]
