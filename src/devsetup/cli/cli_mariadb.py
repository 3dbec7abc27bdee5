from __future__ import annotations

import argparse

from devsetup.branding import DEVSETUP_HEADER, SYMBOLS
from devsetup.container import launch
from devsetup.env import ConfigError, resolve_mariadb_spec
from devsetup.logger import get_logger
from .common import add_output_flags, start_command


def build_mariadb_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "mariadb", help="Start the local MariaDB development container"
    )
    add_output_flags(p)


def handle_mariadb(args: argparse.Namespace | None = None) -> int:
    start_command("mariadb", args)
    log = get_logger("devsetup")

    log.info(DEVSETUP_HEADER("Starting MariaDB Local(Dev) Container"))

    try:
        spec = resolve_mariadb_spec()
    except ConfigError as e:
        log.error(f"{SYMBOLS.FAIL} ERROR: {e}")
        return 1

    result = launch(spec)

    if not result.ok:
        log.error(f"{SYMBOLS.FAIL} Failed to start MariaDB container")
        log.error(f"    {result.detail}")
        return 1

    log.info(f"{SYMBOLS.OK} MariaDB container started successfully")
    log.info("")
    log.info("Container Status:")
    if result.container_status:
        for line in result.container_status.splitlines():
            log.info(line)
    else:
        log.warning(f"{SYMBOLS.WARN} could not read container status")
    log.info("")
    log.info("Access Methods:")
    log.info(f"  - Docker exec: docker exec -it {spec.name} mariadb -u root -p")
    for host, container in spec.ports:
        log.info(f"  - TCP: 127.0.0.1:{host} -> {container}")
    return 0
