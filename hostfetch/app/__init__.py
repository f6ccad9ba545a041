"""Orchestration, configuration and output for hostfetch."""

from .config import DEFAULT_LOGO, BuildOutcome, FetchConfig, build_config  # noqa: F401
from .orchestrator import ExecutionRequest, ExecutionResult, execute, run_probe  # noqa: F401
from .output import Logo, OutputFormatter, RenderedModule, render_modules  # noqa: F401
