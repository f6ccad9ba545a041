from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from ..context import SystemContext
from .base import Category, Probe
from .outcome import ProbeOutcome
from .parsing import leading_int, parse_key_value_lines
from .platforms import Platform


logger = logging.getLogger(__name__)

BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")
VM_STAT_PAGE_SIZE = re.compile(r"page size of (\d+) bytes")
DEFAULT_PAGE_SIZE = 4096


def format_bytes(count: int) -> str:
    size = float(count)
    unit = 0
    while size >= 1024.0 and unit < len(BYTE_UNITS) - 1:
        size /= 1024.0
        unit += 1
    return f"{size:.2f} {BYTE_UNITS[unit]}"


def compute_used(total: int, available: int) -> int:
    """Used bytes, saturating at zero when ``available`` exceeds ``total``."""

    return max(total - available, 0)


@dataclass(frozen=True)
class MemoryInfo:
    total: int
    used: int

    @property
    def available(self) -> int:
        return max(self.total - self.used, 0)

    def __str__(self) -> str:
        return f"{format_bytes(self.used)} / {format_bytes(self.total)}"

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "used": self.used, "available": self.available}


def _memory_outcome(total: int | None, available: int | None) -> ProbeOutcome[MemoryInfo]:
    if not total or total <= 0:
        return ProbeOutcome.unavailable()
    return ProbeOutcome.detected(MemoryInfo(total=total, used=compute_used(total, available or 0)))


def _detect_linux(context: SystemContext) -> ProbeOutcome[MemoryInfo]:
    fields = parse_key_value_lines(context.read_text_file("/proc/meminfo"), ":")
    kib = {key: leading_int(value) for key, value in fields.items()}

    total = kib.get("MemTotal")
    available = kib.get("MemAvailable")
    if available is None:
        # Kernels before 3.14 do not report MemAvailable.
        parts = [kib.get(key) for key in ("MemFree", "Buffers", "Cached")]
        available = sum(part for part in parts if part is not None)
    return _memory_outcome(
        total * 1024 if total is not None else None,
        available * 1024,
    )


def _sysctl_int(context: SystemContext, name: str) -> int | None:
    output = context.run_command("sysctl", ["-n", name])
    if not output.success:
        return None
    return leading_int(output.text())


def _detect_macos(context: SystemContext) -> ProbeOutcome[MemoryInfo]:
    total = _sysctl_int(context, "hw.memsize")
    if not total:
        return ProbeOutcome.unavailable()

    free_pages = 0
    page_size = DEFAULT_PAGE_SIZE
    vm_stat = context.run_command("vm_stat")
    if vm_stat.success:
        text = vm_stat.text()
        match = VM_STAT_PAGE_SIZE.search(text)
        if match:
            page_size = int(match.group(1))
        free_pages = leading_int(parse_key_value_lines(text, ":").get("Pages free", "")) or 0
    else:
        logger.debug("vm_stat failed; reporting all memory as used")
    return _memory_outcome(total, free_pages * page_size)


def _detect_freebsd(context: SystemContext) -> ProbeOutcome[MemoryInfo]:
    total = _sysctl_int(context, "hw.physmem")
    if not total:
        return ProbeOutcome.unavailable()
    free_pages = _sysctl_int(context, "vm.stats.vm.v_free_count") or 0
    page_size = _sysctl_int(context, "hw.pagesize") or DEFAULT_PAGE_SIZE
    return _memory_outcome(total, free_pages * page_size)


def _detect_windows(context: SystemContext) -> ProbeOutcome[MemoryInfo]:
    output = context.run_command(
        "wmic", ["OS", "get", "TotalVisibleMemorySize,FreePhysicalMemory", "/Value"]
    )
    if not output.success:
        return ProbeOutcome.unavailable()
    fields = parse_key_value_lines(output.text())
    total = leading_int(fields.get("TotalVisibleMemorySize", ""))
    free = leading_int(fields.get("FreePhysicalMemory", ""))
    return _memory_outcome(
        total * 1024 if total is not None else None,
        free * 1024 if free is not None else None,
    )


class MemoryProbe(Probe):
    category = Category.MEMORY
    strategies = {
        Platform.LINUX: _detect_linux,
        Platform.MACOS: _detect_macos,
        Platform.FREEBSD: _detect_freebsd,
        Platform.WINDOWS: _detect_windows,
    }
