# SPDX-License-Identifier: MIT
"""Command-line interface for upgrading environment files."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Sequence

import logfire

from core import new_environment
from engine import MigrationEngine
from io_utils import atomic_write, backup_file, dump_environments, load_environments
from migrations import MIGRATIONS, MigrationError, read_marker
from observability import telemetry
from observability.monitoring import init_logfire
from runtime.environment import RuntimeEnv
from runtime.settings import Settings, load_settings

LOG_LEVELS = ["fatal", "error", "warn", "notice", "info", "debug", "trace"]
ENVIRONMENT_FILE_HELP = "JSON file holding one environment or a list of them"


def _package_version() -> str:
    """Return the installed package version."""
    try:
        return version("environment-migrations")
    except PackageNotFoundError:
        return "unknown"


def _configure_logging(args: argparse.Namespace, settings: Settings) -> None:
    """Configure Logfire based on verbosity flags."""

    index = 2 + args.verbose - args.quiet
    index = max(0, min(len(LOG_LEVELS) - 1, index))
    init_logfire(settings.logfire_token, LOG_LEVELS[index])  # type: ignore[arg-type]


def _cmd_migrate(args: argparse.Namespace, settings: Settings) -> int:
    """Upgrade every environment in ``args.input_file``."""

    input_path = Path(args.input_file)
    output_path = Path(args.output) if args.output else input_path
    environments, single = load_environments(input_path)

    env = RuntimeEnv.instance()
    engine = MigrationEngine(
        error_handler=env.error_handler,
        quarantine=None if args.dry_run else env.quarantine,
        strict=args.strict or settings.strict,
    )
    result = engine.migrate(environments, target=args.target)

    for report in result.reports:
        label = report.name or report.uuid or "?"
        if report.future:
            print(f"{label}: written by a newer release (marker {report.from_marker})")
        elif report.applied:
            print(f"{label}: {report.from_marker} -> {report.to_marker}")
        else:
            print(f"{label}: up to date ({report.to_marker})")
    for failure in result.failures:
        print(f"{failure.environment}: failed ({failure.error})")

    changed = any(report.applied for report in result.reports) or bool(
        result.failures
    )
    if args.dry_run:
        logfire.info("Dry run, nothing written", path=str(output_path))
    elif changed or output_path != input_path:
        if output_path == input_path and settings.backup:
            backup_file(input_path)
        atomic_write(output_path, dump_environments(environments, single))
    return 0 if result.ok else 1


def _cmd_status(args: argparse.Namespace, settings: Settings) -> int:
    """Print the migration state of every environment in ``args.input_file``."""

    environments, _ = load_environments(Path(args.input_file))
    code = 0
    for index, environment in enumerate(environments):
        if not isinstance(environment, dict):
            print(f"environment-{index}: not an object")
            code = 1
            continue
        label = environment.get("name") or environment.get("uuid") or index
        try:
            marker = read_marker(environment)
        except MigrationError as exc:
            print(f"{label}: {exc}")
            code = 1
            continue
        if marker > MIGRATIONS.highest_id:
            print(f"{label}: marker {marker} is newer than {MIGRATIONS.highest_id}")
        else:
            pending = len(MIGRATIONS.pending(marker))
            print(f"{label}: marker {marker}, {pending} pending")
    return code


def _cmd_new(args: argparse.Namespace, settings: Settings) -> int:
    """Print a new environment in the current schema."""

    print(dump_environments([new_environment(args.name)], single=True), end="")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    """Return the top-level argument parser."""

    parser = argparse.ArgumentParser(
        prog="environment-migrations",
        description="Upgrade mock API environment files to the current schema",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {_package_version()}"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="Path to the YAML configuration file (default config/app.yaml)",
    )
    common.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (may be repeated)",
    )
    common.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Decrease logging verbosity (may be repeated)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    mig_p = subparsers.add_parser(
        "migrate",
        parents=[common],
        help="Upgrade environments to the current schema",
        description=(
            "Apply every pending migration to the environments in a file and "
            "write the result back"
        ),
    )
    mig_p.add_argument("input_file", help=ENVIRONMENT_FILE_HELP)
    mig_p.add_argument(
        "--output",
        default=None,
        help="Write migrated environments here instead of rewriting the input",
    )
    mig_p.add_argument(
        "--target",
        type=int,
        default=None,
        help="Stop after this migration id (default: latest)",
    )
    mig_p.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing any file",
    )
    mig_p.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first environment that fails to migrate",
    )
    mig_p.set_defaults(func=_cmd_migrate)

    stat_p = subparsers.add_parser(
        "status",
        parents=[common],
        help="Show the migration marker of each environment",
    )
    stat_p.add_argument("input_file", help=ENVIRONMENT_FILE_HELP)
    stat_p.set_defaults(func=_cmd_status)

    new_p = subparsers.add_parser(
        "new",
        parents=[common],
        help="Print an empty environment in the current schema",
    )
    new_p.add_argument("--name", default="New environment", help="Environment name")
    new_p.set_defaults(func=_cmd_new)

    return parser


def _execute_subcommand(args: argparse.Namespace, settings: Settings) -> int:
    """Initialise runtime and dispatch to the chosen subcommand."""

    RuntimeEnv.initialize(settings)
    _configure_logging(args, settings)
    telemetry.reset()
    try:
        code = args.func(args, settings)
    except MigrationError as exc:
        print(f"error: {exc}")
        code = 1
    telemetry.print_summary()
    logfire.force_flush()
    return code


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments and dispatch to the requested subcommand."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.config)
    code = _execute_subcommand(args, settings)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    # Allow module to be executed as a standalone script
    main()
