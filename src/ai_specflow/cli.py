"""Command line entry point for ai-specflow.

Usage:
    ai-specflow init [options]
    ai-specflow --help

Exit status is 0 on success and 1 for usage errors, missing bundled
templates, invalid configuration, text that cannot be decoded or
re-encoded, or any filesystem failure.  Usage errors are detected before
any file is touched.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from . import __version__
from .config_loader import load_hierarchical_config
from .config_schema import SpecflowConfig, build_config
from .errors import SpecflowError, UsageError
from .logger import setup_logging
from .providers import PROVIDER_NAMES, PROVIDERS
from .sync.models import SyncOptions
from .sync.orchestrator import default_package_root, run_init
from .sync.reporter import format_init_report, report_to_json

logger = logging.getLogger(__name__)

PROG = "ai-specflow"


class SpecflowArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ``UsageError`` instead of exiting with 2."""

    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message, self.format_help())


def build_parser() -> argparse.ArgumentParser:
    """Build the ``ai-specflow`` argument parser."""
    parser = SpecflowArgumentParser(
        prog=PROG,
        description="Scaffold spec-driven development conventions and AI agent instructions into a project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview what would be written into the current directory
  ai-specflow init --dry-run

  # Scaffold another project with Claude and Cursor wrappers
  ai-specflow init --target ../my-app --with-claude --with-cursor

  # Refresh every template file, overwriting existing copies
  ai-specflow init --with-all --force
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"{PROG} version {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    init = subparsers.add_parser(
        "init",
        help="Scaffold templates into a target project",
        description="Copy .ai/ and docs/sdd/ templates into the target "
        "and install the selected provider wrappers.",
    )
    init.add_argument(
        "--target",
        default=None,
        metavar="PATH",
        help="Target project path (default: cwd)",
    )
    init.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes without writing files",
    )
    init.add_argument(
        "--force",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Overwrite existing scaffold files (default: config init.force)",
    )
    for name in PROVIDER_NAMES:
        init.add_argument(
            f"--with-{name}",
            action="append_const",
            const=name,
            dest="providers",
            help=PROVIDERS[name].description,
        )
    init.add_argument(
        "--with-all",
        action="store_true",
        help=f"Include {', '.join(p.capitalize() for p in PROVIDER_NAMES)}",
    )
    init.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    init.add_argument(
        "--config",
        metavar="PATH",
        help="Config file to use instead of the discovered ones",
    )
    init.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging on stderr",
    )
    init.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write log output to this file",
    )
    init.add_argument(
        "--log-format",
        choices=("text", "json"),
        default="text",
        help="Log output format (default: text)",
    )
    return parser


def _selected_providers(
    args: argparse.Namespace, config: SpecflowConfig
) -> list[str]:
    if args.with_all:
        return list(PROVIDER_NAMES)
    if args.providers:
        return list(args.providers)
    return list(config.init.providers)


def _config_log_file(config: SpecflowConfig, target: Path) -> str | None:
    # Relative paths in a config file are relative to the target project
    if not config.logging.file:
        return None
    return str(target / Path(config.logging.file).expanduser())


def run_init_command(
    args: argparse.Namespace, package_root: Path | None = None
) -> int:
    """Execute ``init`` for parsed *args* and return the exit status."""
    target = Path(args.target).resolve() if args.target else Path.cwd()

    try:
        raw = load_hierarchical_config(
            target, Path(args.config) if args.config else None
        )
        config = build_config(raw)
    except (OSError, UnicodeError, yaml.YAMLError, ValidationError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    setup_logging(
        debug=args.debug,
        log_file=args.log_file or _config_log_file(config, target),
        debug_format=args.log_format,
        level=config.logging.level,
    )

    options = SyncOptions(
        dry_run=args.dry_run,
        force=config.init.force if args.force is None else args.force,
    )

    try:
        report = run_init(
            package_root or default_package_root(),
            target,
            options,
            providers=_selected_providers(args, config),
            block=config.markers.to_block(),
        )
    except (SpecflowError, OSError) as exc:
        logger.debug("init failed", exc_info=True)
        print(f"Error running {PROG} init:", file=sys.stderr)
        print(str(exc), file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(report_to_json(report), indent=2))
    else:
        print(format_init_report(report))
    return 0


def main(
    argv: list[str] | None = None, package_root: Path | None = None
) -> int:
    """Parse *argv* and dispatch; returns the process exit status."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        print(exc.usage or parser.format_help(), file=sys.stderr)
        return 1

    if args.command is None:
        parser.print_help()
        return 0

    return run_init_command(args, package_root)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
