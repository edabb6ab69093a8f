"""Command-line interface for inspecting load-test configuration.

The CLI only prints what a run would use; start runs with
`locust -f load_tests/locustfile.py`.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config.environments import get_environment
from .config.settings import get_settings
from .config.thresholds import LOAD_PROFILES, THRESHOLDS
from .core.models import TestType
from .targets import TARGETS, get_target
from .utils.errors import LoadTestError

console = Console()


def setup_logging(verbose: bool = False, level: Optional[str] = None) -> None:
    """Route log records through rich; `verbose` forces DEBUG."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else (level or "INFO").upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def cmd_options(args: argparse.Namespace) -> int:
    target = get_target(args.target)
    options = target.options(args.type)
    console.print_json(json.dumps(options.to_dict()))
    return 0


def cmd_targets(args: argparse.Namespace) -> int:
    env = get_environment(args.env)
    table = Table(title=f"Targets ({env.name})", header_style="bold")
    table.add_column("Target", style="cyan")
    table.add_column("Base URL")
    table.add_column("Scenarios")
    table.add_column("Description", style="dim")
    for target in TARGETS.values():
        table.add_row(
            target.name,
            target.base_url(env),
            ", ".join(target.scenarios),
            target.description,
        )
    console.print(table)
    return 0


def cmd_thresholds(args: argparse.Namespace) -> int:
    types = [args.type] if args.type else list(THRESHOLDS)
    table = Table(title="Thresholds by test type", header_style="bold")
    table.add_column("Test type", style="cyan")
    table.add_column("Executor")
    table.add_column("Selector")
    table.add_column("Predicates", style="green")
    for test_type in types:
        if test_type not in THRESHOLDS:
            raise LoadTestError(f"Unknown test type: {test_type}")
        executor = LOAD_PROFILES[test_type].executor
        for i, (selector, predicates) in enumerate(THRESHOLDS[test_type].items()):
            table.add_row(
                test_type if i == 0 else "",
                executor if i == 0 else "",
                selector,
                ", ".join(predicates),
            )
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    test_types = [t.value for t in TestType]

    parser = argparse.ArgumentParser(
        prog="ochub-loadtest",
        description="Inspect OpenCloudHub load-test configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run configuration the locustfile would build
  ochub-loadtest options --type load --target model-wine

  # Targets with their base URLs in the internal environment
  ochub-loadtest targets --env internal

  # Thresholds applied to stress tests
  ochub-loadtest thresholds --type stress
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    options = subparsers.add_parser("options", help="Print a run configuration as JSON")
    options.add_argument("--type", choices=test_types, default=settings.test_type, help="Test type")
    options.add_argument("--target", default=settings.test_target, help="Target name")
    options.set_defaults(func=cmd_options)

    targets = subparsers.add_parser("targets", help="List targets")
    targets.add_argument("--env", default=settings.test_env, help="Environment name")
    targets.set_defaults(func=cmd_targets)

    thresholds = subparsers.add_parser("thresholds", help="Show threshold tables")
    thresholds.add_argument("--type", choices=test_types, help="Only this test type")
    thresholds.set_defaults(func=cmd_thresholds)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, get_settings().log_level)
    try:
        return args.func(args)
    except LoadTestError as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
