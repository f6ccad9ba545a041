from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Mapping, Type

from ..context import SystemContext
from .outcome import ProbeOutcome, UnsupportedPlatformError
from .platforms import CURRENT_PLATFORM, Platform


logger = logging.getLogger(__name__)

Strategy = Callable[[SystemContext], ProbeOutcome[Any]]


class Category(Enum):
    """Kinds of host information, in their canonical display order."""

    OS = ("os", "OS")
    HOST = ("host", "Host")
    KERNEL = ("kernel", "Kernel")
    UPTIME = ("uptime", "Uptime")
    SHELL = ("shell", "Shell")
    CPU = ("cpu", "CPU")
    MEMORY = ("memory", "Memory")

    def __init__(self, key: str, display_name: str):
        self.key = key
        self.display_name = display_name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Category):
            return NotImplemented
        order = list(Category)
        return order.index(self) < order.index(other)

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class UnknownCategory:
    """Text that does not name any :class:`Category`."""

    text: str

    def __str__(self) -> str:
        return f"Unknown module: {self.text}"


def all_categories() -> list[Category]:
    return list(Category)


def parse_category(text: str) -> Category | UnknownCategory:
    """Resolve a module name case-insensitively, never raising."""

    wanted = text.strip().lower()
    for category in Category:
        if category.key == wanted:
            return category
    return UnknownCategory(text)


class Probe:
    """Base class for host information probes.

    Subclasses define ``category`` and ``strategies``, a mapping from
    :class:`Platform` to a function that turns a :class:`SystemContext` into
    a :class:`ProbeOutcome`. Construction performs no I/O; all host access
    happens inside :meth:`detect`.
    """

    category: ClassVar[Category]
    strategies: ClassVar[Mapping[Platform, Strategy]] = {}
    _registry: ClassVar[dict[Category, Type["Probe"]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        category = getattr(cls, "category", None)
        if category is None:
            return
        if category in cls._registry:
            raise ValueError(f"Duplicate probe registered for category: {category.key}")
        cls._registry[category] = cls

    def __init__(self, platform: Platform = CURRENT_PLATFORM):
        self.platform = platform

    def detect(self, context: SystemContext) -> ProbeOutcome[Any]:
        """Run the strategy for this probe's platform.

        Faults raised by the strategy are converted into the error arm here
        and never propagate to the caller.
        """

        try:
            strategy = self.strategies.get(self.platform)
            if strategy is None:
                raise UnsupportedPlatformError(self.platform.value)
            return strategy(context)
        except Exception as exc:
            logger.debug("%s probe failed on %s: %s", self.category.key, self.platform.value, exc)
            return ProbeOutcome.from_exception(exc)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} category={self.category.key!r} platform={self.platform.value!r}>"


def discover_probes() -> list[Type[Probe]]:
    """Return registered probe classes in category order."""

    return [Probe._registry[category] for category in Category if category in Probe._registry]


def create_probe(category: Category, platform: Platform = CURRENT_PLATFORM) -> Probe:
    try:
        probe_type = Probe._registry[category]
    except KeyError:
        raise LookupError(f"No probe registered for category: {category.key}") from None
    return probe_type(platform)
