from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..probes import Category, UnknownCategory, all_categories, parse_category
from .orchestrator import ExecutionRequest


DEFAULT_LOGO = r"""  _               _    __      _       _
 | |__   ___  ___| |_ / _| ___| |_ ___| |__
 | '_ \ / _ \/ __| __| |_ / _ \ __/ __| '_ \
 | | | | (_) \__ \ |_|  _|  __/ || (__| | | |
 |_| |_|\___/|___/\__|_|  \___|\__\___|_| |_|"""


@dataclass(frozen=True)
class FetchConfig:
    """Resolved settings for one run."""

    modules: tuple[Category, ...] = field(default_factory=lambda: tuple(all_categories()))
    parallel: bool = True
    values_only: bool = False
    logo: str | None = DEFAULT_LOGO
    max_workers: int | None = None

    def to_request(self) -> ExecutionRequest:
        return ExecutionRequest(self.modules, parallel=self.parallel, max_workers=self.max_workers)


@dataclass(frozen=True)
class BuildOutcome:
    config: FetchConfig
    unknown_modules: list[str]


def build_config(
    module_names: Iterable[str] | None = None,
    *,
    parallel: bool = True,
    values_only: bool = False,
    logo: str | None = DEFAULT_LOGO,
    max_workers: int | None = None,
) -> BuildOutcome:
    """Resolve module names into a :class:`FetchConfig`.

    ``None`` selects every category. Unknown names are collected in
    :attr:`BuildOutcome.unknown_modules` instead of raising, so callers can
    warn and carry on with the names that did resolve.
    """

    unknown: list[str] = []
    if module_names is None:
        modules = tuple(all_categories())
    else:
        resolved: list[Category] = []
        for name in module_names:
            parsed = parse_category(name)
            if isinstance(parsed, UnknownCategory):
                unknown.append(parsed.text)
            else:
                resolved.append(parsed)
        modules = tuple(resolved)

    if max_workers is not None and max_workers < 1:
        raise ValueError("max_workers must be at least 1")

    config = FetchConfig(
        modules=modules,
        parallel=parallel,
        values_only=values_only,
        logo=logo,
        max_workers=max_workers,
    )
    return BuildOutcome(config=config, unknown_modules=unknown)
