from __future__ import annotations

import argparse

from devsetup.bootstrap import bootstrap_run_context
from devsetup.logger import get_logger, init_logging


def dispatch_subparser_help(
    parser: argparse.ArgumentParser, path: list[str] | None
) -> int:
    """
    Implements consistent `X help [subcmd ...]` behavior for a subtree parser.
    """
    if not path:
        parser.print_help()
        return 0

    try:
        parser.parse_args(path + ["--help"])
    except SystemExit:
        pass
    return 0


def add_output_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose", action="store_true", help="Log command output at DEBUG"
    )
    parser.add_argument("--quiet", action="store_true", help="Log to file only")


def start_command(command: str, args: argparse.Namespace | None = None) -> None:
    """Stamp run context and bring logging up for a run-style command."""
    verbose = getattr(args, "verbose", False) if args is not None else False
    quiet = getattr(args, "quiet", False) if args is not None else False

    # Unset flags leave DEVSETUP_VERBOSE / DEVSETUP_QUIET from the env alone
    bootstrap_run_context(
        command=command,
        verbose=True if verbose else None,
        quiet=True if quiet else None,
    )
    init_logging()
    get_logger("devsetup").debug(f"Command: {command}")
