from __future__ import annotations

import logging
import ntpath
import posixpath
from dataclasses import dataclass
from typing import Any

from ..context import SystemContext
from .base import Category, Probe
from .outcome import ProbeOutcome
from .parsing import last_version_token
from .platforms import Platform


logger = logging.getLogger(__name__)

# Shells known to answer ``--version`` without starting an interactive session.
VERSIONED_SHELLS = frozenset({"bash", "zsh", "fish", "ksh", "tcsh"})


@dataclass(frozen=True)
class ShellInfo:
    name: str
    version: str | None = None

    def __str__(self) -> str:
        if self.version:
            return f"{self.name} {self.version}"
        return self.name

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version}


def shell_version(context: SystemContext, shell_path: str) -> str | None:
    """Best-effort version of the shell at ``shell_path``."""

    try:
        output = context.run_command(shell_path, ["--version"])
    except OSError as exc:
        logger.debug("Cannot run %s --version: %s", shell_path, exc)
        return None
    if not output.success:
        return None
    lines = output.text().strip().splitlines()
    if not lines:
        return None
    return last_version_token(lines[0].split())


def _detect_unix(context: SystemContext) -> ProbeOutcome[ShellInfo]:
    shell_path = (context.get_env_var("SHELL") or "").strip()
    if not shell_path:
        return ProbeOutcome.unavailable()
    name = posixpath.basename(shell_path.rstrip("/")) or shell_path

    version = None
    if name in VERSIONED_SHELLS:
        version = shell_version(context, shell_path)
    return ProbeOutcome.detected(ShellInfo(name=name, version=version))


def _detect_windows(context: SystemContext) -> ProbeOutcome[ShellInfo]:
    comspec = (context.get_env_var("COMSPEC") or "").strip()
    if not comspec:
        return ProbeOutcome.unavailable()
    name, _ = ntpath.splitext(ntpath.basename(comspec))
    return ProbeOutcome.detected(ShellInfo(name=name or comspec))


class ShellProbe(Probe):
    category = Category.SHELL
    strategies = {
        Platform.LINUX: _detect_unix,
        Platform.MACOS: _detect_unix,
        Platform.FREEBSD: _detect_unix,
        Platform.WINDOWS: _detect_windows,
    }
