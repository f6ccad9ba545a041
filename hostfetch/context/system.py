"""System access abstractions shared by every probe."""

from __future__ import annotations

import logging
import os
import platform
import socket
import subprocess
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol, Sequence


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Captured result of a finished command."""

    stdout: bytes
    stderr: bytes
    success: bool

    def text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class KernelIdentity:
    """uname-equivalent description of the running kernel."""

    system: str
    node: str
    release: str
    version: str
    machine: str


class SystemContext(Protocol):
    """Read-only view of the host used by probes."""

    def read_text_file(self, path: str | Path) -> str:  # pragma: no cover - interface
        ...

    def run_command(self, program: str, args: Sequence[str] = ()) -> CommandOutput:  # pragma: no cover - interface
        ...

    def get_env_var(self, name: str) -> str | None:  # pragma: no cover - interface
        ...

    def get_hostname(self) -> str:  # pragma: no cover - interface
        ...

    def get_kernel_identity(self) -> KernelIdentity:  # pragma: no cover - interface
        ...

    def now(self) -> datetime:  # pragma: no cover - interface
        ...


class RealSystemContext:
    """Context backed by the actual operating system."""

    def read_text_file(self, path: str | Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise OSError(f"{path}: not valid UTF-8 text ({exc.reason})") from exc

    def run_command(self, program: str, args: Sequence[str] = ()) -> CommandOutput:
        command = [program, *args]
        logger.debug("Running %s", " ".join(command))
        result = subprocess.run(command, capture_output=True, check=False)
        return CommandOutput(
            stdout=result.stdout,
            stderr=result.stderr,
            success=result.returncode == 0,
        )

    def get_env_var(self, name: str) -> str | None:
        return os.environ.get(name)

    def get_hostname(self) -> str:
        return socket.gethostname()

    def get_kernel_identity(self) -> KernelIdentity:
        if hasattr(os, "uname"):
            uts = os.uname()
            return KernelIdentity(
                system=uts.sysname,
                node=uts.nodename,
                release=uts.release,
                version=uts.version,
                machine=uts.machine,
            )
        uname = platform.uname()
        if not uname.system:
            raise OSError("Kernel identity could not be determined")
        return KernelIdentity(
            system=uname.system,
            node=uname.node,
            release=uname.release,
            version=uname.version,
            machine=uname.machine,
        )

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass
class MockSystemContext:
    """In-memory context useful for testing.

    Files, commands and environment variables are looked up by key. A
    missing key raises :class:`FileNotFoundError`, the same way the real
    context fails for a missing file or program. Commands are matched on the
    full command line first (``"sysctl -n hw.ncpu"``) and then on the bare
    program name.
    """

    files: dict[str, str] = field(default_factory=dict)
    commands: dict[str, CommandOutput] = field(default_factory=dict)
    env_vars: dict[str, str] = field(default_factory=dict)
    hostname: str | None = None
    kernel_identity: KernelIdentity | None = None
    clock: datetime = field(default_factory=lambda: datetime(2024, 1, 1, tzinfo=timezone.utc))

    def read_text_file(self, path: str | Path) -> str:
        try:
            return self.files[str(path)]
        except KeyError:
            raise FileNotFoundError(f"File not found: {path}") from None

    def run_command(self, program: str, args: Sequence[str] = ()) -> CommandOutput:
        command_line = " ".join([program, *args])
        for key in (command_line, program):
            if key in self.commands:
                return self.commands[key]
        raise FileNotFoundError(f"Command not found: {program}")

    def get_env_var(self, name: str) -> str | None:
        return self.env_vars.get(name)

    def get_hostname(self) -> str:
        if self.hostname is None:
            raise FileNotFoundError("Hostname not set")
        return self.hostname

    def get_kernel_identity(self) -> KernelIdentity:
        if self.kernel_identity is None:
            raise FileNotFoundError("Kernel identity not set")
        return self.kernel_identity

    def now(self) -> datetime:
        return self.clock

    def add_command(self, command_line: str, stdout: str, *, success: bool = True) -> None:
        self.commands[command_line] = CommandOutput(stdout.encode("utf-8"), b"", success)
