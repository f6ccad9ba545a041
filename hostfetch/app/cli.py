"""Entrypoint for the hostfetch command."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from typing import Sequence

from ..probes import all_categories
from .config import DEFAULT_LOGO, BuildOutcome, build_config
from .orchestrator import execute
from .output import Logo, OutputFormatter, render_modules


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class CliOptions:
    modules: list[str] | None
    no_parallel: bool
    values_only: bool
    list_modules: bool
    no_logo: bool
    json: bool
    max_workers: int | None
    log_level: str


def _module_list(value: str) -> list[str]:
    return [name for name in (part.strip() for part in value.split(",")) if name]


def _parse_args(argv: Sequence[str] | None) -> CliOptions:
    parser = argparse.ArgumentParser(prog="hostfetch", description="Show system information")
    parser.add_argument(
        "-m",
        "--modules",
        type=_module_list,
        help="Comma-separated modules to display (default: all)",
    )
    parser.add_argument("--no-parallel", action="store_true", help="Run modules one after another")
    parser.add_argument("--values-only", action="store_true", help="Show only module values without labels")
    parser.add_argument("--list-modules", action="store_true", help="List all available modules")
    parser.add_argument("--no-logo", action="store_true", help="Do not print the ASCII logo")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--max-workers", type=int, help="Upper bound on parallel probe workers")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, type=str.upper)

    args = parser.parse_args(argv)
    if args.max_workers is not None and args.max_workers < 1:
        parser.error("--max-workers must be at least 1")

    return CliOptions(
        modules=args.modules,
        no_parallel=args.no_parallel,
        values_only=args.values_only,
        list_modules=args.list_modules,
        no_logo=args.no_logo,
        json=args.json,
        max_workers=args.max_workers,
        log_level=args.log_level,
    )


def _list_modules() -> None:
    print("Available modules:")
    for category in all_categories():
        print(f"  - {category.key} ({category.display_name})")


def _resolve_config(options: CliOptions) -> BuildOutcome:
    outcome = build_config(
        options.modules,
        parallel=not options.no_parallel,
        values_only=options.values_only,
        logo=None if options.no_logo or options.values_only else DEFAULT_LOGO,
        max_workers=options.max_workers,
    )
    if options.modules is not None:
        if not outcome.config.modules:
            print("Error: No valid modules specified", file=sys.stderr)
            raise SystemExit(1)
        for unknown in outcome.unknown_modules:
            print(f"Warning: Unknown module '{unknown}', skipping", file=sys.stderr)
    return outcome


def main(argv: Sequence[str] | None = None) -> None:
    options = _parse_args(argv)
    logging.basicConfig(
        level=options.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if options.list_modules:
        _list_modules()
        return

    config = _resolve_config(options).config
    result = execute(config.to_request())

    if options.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    formatter = OutputFormatter(values_only=config.values_only, logo=Logo.from_text(config.logo))
    print(formatter.render(render_modules(result)))


if __name__ == "__main__":
    main()
