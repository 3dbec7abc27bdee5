from __future__ import annotations

import argparse
import sys
from typing import Callable, Sequence

from devsetup.bootstrap import bootstrap_base_env


def _dispatch_help(argv: list[str]) -> int:
    # Support:
    #   devsetup help
    #   devsetup help env
    #   devsetup env help
    if argv and argv[0] == "help":
        argv = argv[1:]
    argv = [a for a in argv if a != "help"]

    try:
        build_parser().parse_args(argv + ["--help"])
    except SystemExit:
        pass
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="devsetup",
        description="Development machine provisioning and local services",
    )

    sub = p.add_subparsers(dest="command", required=True)

    help_cmd = sub.add_parser("help", help="Show help")
    help_cmd.add_argument("path", nargs="*", help="Command path to show help for")
    help_cmd.set_defaults(_help=True)

    # Keep imports inside builder to avoid early side effects.
    from devsetup.cli.cli_env import build_env_parser
    from devsetup.cli.cli_linux import build_linux_parser
    from devsetup.cli.cli_mariadb import build_mariadb_parser
    from devsetup.cli.cli_steps import build_steps_parser

    build_linux_parser(sub)
    build_mariadb_parser(sub)
    build_steps_parser(sub)
    build_env_parser(sub)

    return p


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    bootstrap_base_env()

    parser = build_parser()
    if argv and argv[-1] == "help" and argv[0] != "help":
        return _dispatch_help(argv)

    args = parser.parse_args(argv)

    if getattr(args, "_help", False):
        return _dispatch_help(argv)

    if args.command == "linux":
        from devsetup.cli.cli_linux import handle_linux

        return handle_linux(args)

    if args.command == "mariadb":
        from devsetup.cli.cli_mariadb import handle_mariadb

        return handle_mariadb(args)

    if args.command == "steps":
        from devsetup.cli.cli_steps import handle_steps

        return handle_steps(args)

    if args.command == "env":
        from devsetup.cli.cli_env import handle_env

        return handle_env(args)

    raise RuntimeError(f"Unknown command: {args.command}")


# ------------------------------------------------------------
# No-argument entry points
# ------------------------------------------------------------


def _no_args(prog: str, handler: Callable[[], int], argv: Sequence[str] | None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if argv:
        print(f"usage: {prog}", file=sys.stderr)
        print(f"{prog}: error: takes no arguments, got: {' '.join(argv)}", file=sys.stderr)
        return 1

    bootstrap_base_env()
    return handler()


def main_linux(argv: Sequence[str] | None = None) -> int:
    from devsetup.cli.cli_linux import handle_linux

    return _no_args("devsetup-linux", handle_linux, argv)


def main_mariadb(argv: Sequence[str] | None = None) -> int:
    from devsetup.cli.cli_mariadb import handle_mariadb

    return _no_args("devsetup-mariadb", handle_mariadb, argv)


if __name__ == "__main__":
    raise SystemExit(main())
