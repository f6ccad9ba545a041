from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..context import SystemContext
from .base import Category, Probe
from .outcome import ProbeOutcome
from .parsing import last_version_token, parse_key_value_lines
from .platforms import ARCH, Platform


logger = logging.getLogger(__name__)

OS_RELEASE_PATHS = ("/etc/os-release", "/usr/lib/os-release")


@dataclass(frozen=True)
class OsInfo:
    name: str
    version: str | None
    arch: str

    def __str__(self) -> str:
        parts = [self.name]
        if self.version:
            parts.append(self.version)
        parts.append(self.arch)
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version, "arch": self.arch}


def _read_os_release(context: SystemContext) -> str:
    *preferred, fallback = OS_RELEASE_PATHS
    for path in preferred:
        try:
            return context.read_text_file(path)
        except OSError as exc:
            logger.debug("Cannot read %s: %s", path, exc)
    return context.read_text_file(fallback)


def _detect_linux(context: SystemContext) -> ProbeOutcome[OsInfo]:
    fields = parse_key_value_lines(_read_os_release(context))
    return ProbeOutcome.detected(
        OsInfo(
            name=fields.get("PRETTY_NAME") or "Linux",
            version=fields.get("VERSION") or None,
            arch=ARCH,
        )
    )


def _command_version(context: SystemContext, name: str, program: str, *args: str) -> ProbeOutcome[OsInfo]:
    output = context.run_command(program, args)
    version = output.text().strip() if output.success else ""
    return ProbeOutcome.detected(OsInfo(name=name, version=version or None, arch=ARCH))


def _detect_macos(context: SystemContext) -> ProbeOutcome[OsInfo]:
    return _command_version(context, "macOS", "sw_vers", "-productVersion")


def _detect_freebsd(context: SystemContext) -> ProbeOutcome[OsInfo]:
    return _command_version(context, "FreeBSD", "uname", "-r")


def _detect_windows(context: SystemContext) -> ProbeOutcome[OsInfo]:
    # "Microsoft Windows [Version 10.0.19045.3803]"
    output = context.run_command("cmd", ["/c", "ver"])
    version = last_version_token(output.text().split()) if output.success else None
    return ProbeOutcome.detected(OsInfo(name="Windows", version=version, arch=ARCH))


class OsProbe(Probe):
    category = Category.OS
    strategies = {
        Platform.LINUX: _detect_linux,
        Platform.MACOS: _detect_macos,
        Platform.FREEBSD: _detect_freebsd,
        Platform.WINDOWS: _detect_windows,
    }
