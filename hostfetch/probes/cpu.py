from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..context import SystemContext
from .base import Category, Probe
from .outcome import ProbeOutcome
from .parsing import parse_key_value_lines
from .platforms import Platform


UNKNOWN_MODEL = "Unknown CPU"


@dataclass(frozen=True)
class CpuInfo:
    model: str
    cores: int | None = None

    def __str__(self) -> str:
        if self.cores is None:
            return self.model
        return f"{self.model} ({self.cores})"

    def to_dict(self) -> dict[str, Any]:
        return {"model": self.model, "cores": self.cores}


def _optional_int(text: str | None) -> int | None:
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def _detect_linux(context: SystemContext) -> ProbeOutcome[CpuInfo]:
    fields = parse_key_value_lines(context.read_text_file("/proc/cpuinfo"), ":")
    model = fields.get("model name") or UNKNOWN_MODEL
    return ProbeOutcome.detected(CpuInfo(model=model, cores=_optional_int(fields.get("cpu cores"))))


def _sysctl(context: SystemContext, name: str) -> str | None:
    output = context.run_command("sysctl", ["-n", name])
    if not output.success:
        return None
    return output.text().strip() or None


def _sysctl_strategy(model_key: str, cores_key: str):
    def _detect(context: SystemContext) -> ProbeOutcome[CpuInfo]:
        model = _sysctl(context, model_key) or UNKNOWN_MODEL
        cores = _optional_int(_sysctl(context, cores_key))
        return ProbeOutcome.detected(CpuInfo(model=model, cores=cores))

    return _detect


def _detect_windows(context: SystemContext) -> ProbeOutcome[CpuInfo]:
    model = context.get_env_var("PROCESSOR_IDENTIFIER")
    if not model:
        return ProbeOutcome.unavailable()
    cores = _optional_int(context.get_env_var("NUMBER_OF_PROCESSORS"))
    return ProbeOutcome.detected(CpuInfo(model=model.strip(), cores=cores))


class CpuProbe(Probe):
    category = Category.CPU
    strategies = {
        Platform.LINUX: _detect_linux,
        Platform.MACOS: _sysctl_strategy("machdep.cpu.brand_string", "hw.physicalcpu"),
        Platform.FREEBSD: _sysctl_strategy("hw.model", "hw.ncpu"),
        Platform.WINDOWS: _detect_windows,
    }
