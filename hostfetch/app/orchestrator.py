"""Run probes for a set of categories and keep their results in request order."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from ..context import RealSystemContext, SystemContext
from ..probes import CURRENT_PLATFORM, Category, Platform, ProbeOutcome, create_probe
from ..probes.outcome import ErrorKind


logger = logging.getLogger(__name__)

MAX_WORKERS = 32


@dataclass(frozen=True)
class ExecutionRequest:
    """Ordered categories to detect and how to run them."""

    categories: tuple[Category, ...]
    parallel: bool = True
    max_workers: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.categories, tuple):
            object.__setattr__(self, "categories", tuple(self.categories))

    @classmethod
    def of(cls, categories: Iterable[Category], *, parallel: bool = True, max_workers: int | None = None) -> "ExecutionRequest":
        return cls(tuple(categories), parallel=parallel, max_workers=max_workers)


@dataclass(frozen=True)
class ExecutionResult:
    """Category/outcome pairs in the same order as the request."""

    entries: tuple[tuple[Category, ProbeOutcome[Any]], ...]

    def __iter__(self) -> Iterator[tuple[Category, ProbeOutcome[Any]]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def categories(self) -> list[Category]:
        return [category for category, _ in self.entries]

    def outcome(self, category: Category) -> ProbeOutcome[Any] | None:
        for entry_category, outcome in self.entries:
            if entry_category is category:
                return outcome
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "modules": [
                {"module": category.key, "name": category.display_name, **outcome.to_dict()}
                for category, outcome in self.entries
            ]
        }


def run_probe(category: Category, context: SystemContext, platform: Platform = CURRENT_PLATFORM) -> ProbeOutcome[Any]:
    """Detect one category, turning any escaped fault into an error outcome."""

    try:
        return create_probe(category, platform).detect(context)
    except Exception as exc:
        logger.warning("Probe for %s raised unexpectedly", category.key, exc_info=True)
        return ProbeOutcome.failed(ErrorKind.DETECTION_FAILED, str(exc) or type(exc).__name__)


def execute(
    request: ExecutionRequest,
    context: SystemContext | None = None,
    *,
    platform: Platform = CURRENT_PLATFORM,
) -> ExecutionResult:
    """Run every requested probe and return results in request order."""

    system = context if context is not None else RealSystemContext()
    categories = request.categories
    if not categories:
        return ExecutionResult(())

    if not request.parallel or len(categories) == 1:
        logger.debug("Running %d probes sequentially", len(categories))
        outcomes = [run_probe(category, system, platform) for category in categories]
        return ExecutionResult(tuple(zip(categories, outcomes)))

    workers = request.max_workers or min(MAX_WORKERS, len(categories))
    logger.debug("Running %d probes on %d workers", len(categories), workers)
    slots: list[ProbeOutcome[Any] | None] = [None] * len(categories)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="hostfetch-probe") as pool:
        futures = {
            pool.submit(run_probe, category, system, platform): index
            for index, category in enumerate(categories)
        }
        for future, index in futures.items():
            slots[index] = future.result()

    return ExecutionResult(tuple(zip(categories, slots)))  # type: ignore[arg-type]
