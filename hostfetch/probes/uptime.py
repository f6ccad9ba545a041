from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from dateutil import parser as date_parser

from ..context import SystemContext
from .base import Category, Probe
from .outcome import ParseFailureError, ProbeOutcome
from .platforms import Platform


logger = logging.getLogger(__name__)

BOOTTIME_SECONDS = re.compile(r"\bsec\s*=\s*(\d+)")
SHORT_DATE_QUERY = ["query", r"HKCU\Control Panel\International", "/v", "sShortDate"]


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


@dataclass(frozen=True)
class UptimeInfo:
    seconds: int

    @property
    def days(self) -> int:
        return self.seconds // 86400

    @property
    def hours(self) -> int:
        return (self.seconds % 86400) // 3600

    @property
    def minutes(self) -> int:
        return (self.seconds % 3600) // 60

    def __str__(self) -> str:
        parts = []
        if self.days:
            parts.append(_plural(self.days, "day"))
        if self.hours:
            parts.append(_plural(self.hours, "hour"))
        if self.minutes or not parts:
            parts.append(_plural(self.minutes, "minute"))
        return ", ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {"seconds": self.seconds}


def _parse_date(text: str, *, source: str, dayfirst: bool = False) -> datetime:
    try:
        return date_parser.parse(text.strip(), dayfirst=dayfirst)
    except (ValueError, OverflowError):
        raise ParseFailureError(f"{source}: unrecognised date {text.strip()!r}") from None


def _elapsed_since(context: SystemContext, boot: datetime | float) -> ProbeOutcome[UptimeInfo]:
    boot_timestamp = boot.timestamp() if isinstance(boot, datetime) else boot
    elapsed = context.now().timestamp() - boot_timestamp
    return ProbeOutcome.detected(UptimeInfo(max(int(elapsed), 0)))


def _boot_time_from_uptime_command(context: SystemContext) -> datetime | None:
    try:
        output = context.run_command("uptime", ["-s"])
    except OSError as exc:
        logger.debug("uptime -s unavailable: %s", exc)
        return None
    if not output.success or not output.text().strip():
        return None
    return _parse_date(output.text(), source="uptime -s")


def _detect_linux(context: SystemContext) -> ProbeOutcome[UptimeInfo]:
    try:
        content = context.read_text_file("/proc/uptime")
    except OSError as exc:
        logger.debug("Cannot read /proc/uptime: %s", exc)
        boot = _boot_time_from_uptime_command(context)
        if boot is None:
            raise exc
        return _elapsed_since(context, boot)

    # "<seconds since boot> <idle seconds>"
    tokens = content.split()
    try:
        seconds = float(tokens[0])
    except (IndexError, ValueError):
        raise ParseFailureError(f"/proc/uptime: unexpected content {content.strip()!r}") from None
    return ProbeOutcome.detected(UptimeInfo(max(int(seconds), 0)))


def _detect_bsd(context: SystemContext) -> ProbeOutcome[UptimeInfo]:
    # "{ sec = 1700000000, usec = 0 } Tue Nov 14 22:13:20 2023"
    output = context.run_command("sysctl", ["-n", "kern.boottime"])
    if not output.success:
        return ProbeOutcome.unavailable()
    text = output.text()
    match = BOOTTIME_SECONDS.search(text)
    if match:
        return _elapsed_since(context, float(match.group(1)))
    _, _, trailing = text.rpartition("}")
    return _elapsed_since(context, _parse_date(trailing or text, source="kern.boottime"))


def _windows_dayfirst(context: SystemContext) -> bool:
    """Whether the user's short date format puts the day before the month.

    ``net statistics`` prints dates in that format. Month-first is assumed
    when the registry value cannot be read.
    """

    try:
        output = context.run_command("reg", SHORT_DATE_QUERY)
    except OSError as exc:
        logger.debug("Cannot query short date format: %s", exc)
        return False
    if not output.success:
        return False
    for line in output.text().splitlines():
        tokens = line.split()
        if len(tokens) >= 3 and tokens[0] == "sShortDate":
            return tokens[-1].lower().startswith("d")
    return False


def _detect_windows(context: SystemContext) -> ProbeOutcome[UptimeInfo]:
    # "Statistics since 1/2/2024 10:00:00 AM"
    output = context.run_command("net", ["statistics", "workstation"])
    if not output.success:
        return ProbeOutcome.unavailable()
    for line in output.text().splitlines():
        head, separator, tail = line.partition(" since ")
        if separator and head.strip().lower().startswith("statistics"):
            boot = _parse_date(tail, source="net statistics", dayfirst=_windows_dayfirst(context))
            return _elapsed_since(context, boot)
    return ProbeOutcome.unavailable()


class UptimeProbe(Probe):
    category = Category.UPTIME
    strategies = {
        Platform.LINUX: _detect_linux,
        Platform.MACOS: _detect_bsd,
        Platform.FREEBSD: _detect_bsd,
        Platform.WINDOWS: _detect_windows,
    }
