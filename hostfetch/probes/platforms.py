"""Target platform resolved once at import time."""

from __future__ import annotations

import platform
import sys
from enum import Enum


class Platform(str, Enum):
    LINUX = "linux"
    MACOS = "macos"
    FREEBSD = "freebsd"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    @classmethod
    def from_sys_platform(cls, value: str) -> "Platform":
        if value.startswith("linux"):
            return cls.LINUX
        if value == "darwin":
            return cls.MACOS
        if value.startswith("freebsd"):
            return cls.FREEBSD
        if value in {"win32", "cygwin"}:
            return cls.WINDOWS
        return cls.UNKNOWN

    @property
    def is_supported(self) -> bool:
        return self is not Platform.UNKNOWN

    @property
    def is_unix(self) -> bool:
        return self in {Platform.LINUX, Platform.MACOS, Platform.FREEBSD}


CURRENT_PLATFORM = Platform.from_sys_platform(sys.platform)
ARCH = platform.machine() or "unknown"
