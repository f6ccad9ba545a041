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
class HostInfo:
    hostname: str

    def __str__(self) -> str:
        return self.hostname

    def to_dict(self) -> dict[str, Any]:
        return {"hostname": self.hostname}


def _detect_host(context: SystemContext) -> ProbeOutcome[HostInfo]:
    # A host without a resolvable name is common and not worth an error.
    try:
        hostname = context.get_hostname().strip()
    except OSError as exc:
        logger.debug("Hostname unavailable: %s", exc)
        return ProbeOutcome.unavailable()
    if not hostname:
        return ProbeOutcome.unavailable()
    return ProbeOutcome.detected(HostInfo(hostname))


class HostProbe(Probe):
    category = Category.HOST
    strategies = {
        Platform.LINUX: _detect_host,
        Platform.MACOS: _detect_host,
        Platform.FREEBSD: _detect_host,
        Platform.WINDOWS: _detect_host,
    }
