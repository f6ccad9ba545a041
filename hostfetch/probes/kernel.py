from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..context import SystemContext
from .base import Category, Probe
from .outcome import ProbeOutcome
from .platforms import Platform


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KernelInfo:
    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name} {self.version}".strip()

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version}


def _detect_kernel(context: SystemContext) -> ProbeOutcome[KernelInfo]:
    try:
        identity = context.get_kernel_identity()
    except OSError as exc:
        logger.debug("Kernel identity unavailable: %s", exc)
        return ProbeOutcome.unavailable()
    return ProbeOutcome.detected(KernelInfo(name=identity.system, version=identity.release))


class KernelProbe(Probe):
    category = Category.KERNEL
    strategies = {
        Platform.LINUX: _detect_kernel,
        Platform.MACOS: _detect_kernel,
        Platform.FREEBSD: _detect_kernel,
        Platform.WINDOWS: _detect_kernel,
    }
