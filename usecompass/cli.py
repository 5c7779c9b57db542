"""CLI entrypoints for usecompass commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import CONFIG_FILENAME
from .errors import ConfigError
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator, select_checks
from .reporter import FORMATS, Reporter
from .scaffold import write_config

_COMMANDS = ("check", "init")


def _add_verbosity_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors.",
    )


def _add_root_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-r",
        "--root",
        default=".",
        help="Root path of the project (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="usecompass",
        description="Check that controllers and rake tasks delegate to usecases, "
        "and that usecases and rake files have specs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Run the checks (default when no command is given).",
    )
    _add_root_option(check_parser)
    check_parser.add_argument("-c", "--config", help="Config file path.")
    check_parser.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default="console",
        help="Output format.",
    )
    check_parser.add_argument("-o", "--output", help="Write the report to this file.")
    check_parser.add_argument(
        "-C", "--controllers-only", action="store_true", help="Check controllers only."
    )
    check_parser.add_argument(
        "-S", "--specs-only", action="store_true", help="Check usecase specs only."
    )
    check_parser.add_argument(
        "-R", "--rakes-only", action="store_true", help="Check rake files only."
    )
    _add_verbosity_options(check_parser)

    init_parser = subparsers.add_parser(
        "init",
        help=f"Create a {CONFIG_FILENAME} template in the project root.",
    )
    _add_root_option(init_parser)
    init_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite an existing config file without asking.",
    )
    _add_verbosity_options(init_parser)

    return parser


def _with_default_command(argv: Sequence[str]) -> list[str]:
    args = list(argv)
    if not args:
        return ["check"]
    first = args[0]
    if first in _COMMANDS or first in {"-h", "--help", "--version"}:
        return args
    if first.startswith("-"):
        return ["check", *args]
    return args


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for usecompass commands."""
    parser = _build_parser()
    raw = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(_with_default_command(raw))

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    if args.command == "init":
        _run_init(parser, args)
    elif args.command == "check":
        _run_check(parser, args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_init(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    config_path = Path(args.root).expanduser() / CONFIG_FILENAME
    overwrite = bool(args.force)
    if config_path.exists() and not overwrite:
        if not _confirm(f"Configuration file already exists at {config_path}. Overwrite? [y/N]: "):
            print("Aborted.")
            return
        overwrite = True
    try:
        write_config(config_path, overwrite=overwrite)
    except OSError as exc:
        parser.exit(1, f"usecompass init failed: {exc}\n")
    print(f"Created configuration file: {config_path}")


def _confirm(prompt: str) -> bool:
    try:
        response = input(prompt)
    except EOFError:
        return False
    return response.strip().lower() in {"y", "yes"}


def _run_check(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    logger = get_logger("cli")
    checks = select_checks(
        controllers_only=bool(args.controllers_only),
        specs_only=bool(args.specs_only),
        rakes_only=bool(args.rakes_only),
    )
    try:
        results = Orchestrator().run_check(args.root, config_path=args.config, checks=checks)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"usecompass: invalid configuration: {exc}\n")

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as handle:
                Reporter(format=args.format, output=handle).report(results)
        except OSError as exc:
            parser.exit(1, f"usecompass: could not write report: {exc}\n")
        logger.info("Report written to %s", args.output)
    else:
        Reporter(format=args.format).report(results)

    if results.has_violations:
        parser.exit(1)


if __name__ == "__main__":
    main(sys.argv[1:])
