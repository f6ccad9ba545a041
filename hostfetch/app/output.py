"""Plain-text rendering of detection results."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Sequence

from ..probes import Category, ProbeOutcome
from .orchestrator import ExecutionResult


ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")
HEADER = "hostfetch"
LOGO_SPACER = "  "


@dataclass(frozen=True)
class RenderedModule:
    category: Category
    value: str | None = None
    error: str | None = None

    @classmethod
    def from_outcome(cls, category: Category, outcome: ProbeOutcome[Any]) -> "RenderedModule":
        if outcome.is_detected:
            return cls(category, value=str(outcome.value))
        if outcome.is_error:
            return cls(category, error=str(outcome.error))
        return cls(category)


def render_modules(result: ExecutionResult) -> list[RenderedModule]:
    return [RenderedModule.from_outcome(category, outcome) for category, outcome in result]


class Logo:
    """ASCII art shown to the left of the module lines."""

    def __init__(self, art: str):
        self._lines = art.splitlines()

    @classmethod
    def from_text(cls, art: str | None) -> "Logo | None":
        if not art or not art.strip():
            return None
        return cls(art)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def width(self) -> int:
        return max((visible_width(line) for line in self._lines), default=0)


def visible_width(text: str) -> int:
    return len(ANSI_ESCAPE.sub("", text))


class OutputFormatter:
    """Format module results, optionally beside a logo."""

    def __init__(self, values_only: bool = False, logo: Logo | None = None):
        self.values_only = values_only
        self.logo = logo

    def render(self, modules: Sequence[RenderedModule]) -> str:
        lines: list[str] = []
        if not self.values_only:
            lines.extend([HEADER, ""])

        label_width = max((len(module.category.display_name) for module in modules), default=0)
        for module in modules:
            label = module.category.display_name.ljust(label_width)
            if module.value is not None:
                lines.append(module.value if self.values_only else f"{label}: {module.value}")
            elif self.values_only:
                continue
            elif module.error is not None:
                lines.append(f"{label}: Error - {module.error}")
            else:
                lines.append(f"{label}: Not available")

        if self.logo is None:
            return "\n".join(lines)
        return self._merge_with_logo(lines, self.logo)

    def _merge_with_logo(self, lines: list[str], logo: Logo) -> str:
        logo_lines = logo.lines
        width = logo.width
        merged = []
        for index in range(max(len(lines), len(logo_lines))):
            logo_line = logo_lines[index] if index < len(logo_lines) else ""
            content = lines[index] if index < len(lines) else ""
            padding = " " * (width - visible_width(logo_line))
            merged.append(f"{logo_line}{padding}{LOGO_SPACER}{content}".rstrip())
        return "\n".join(merged)
