from __future__ import annotations

import argparse

from devsetup.branding import DEVSETUP_BANNER, DEVSETUP_BOX, SYMBOLS
from devsetup.env import ConfigError, resolve_runner_config
from devsetup.logger import current_log_file, get_logger
from devsetup.model import RunState, StepStatus
from devsetup.runner import log_summary, run
from devsetup.steps import next_steps, steps
from .common import add_output_flags, start_command


def build_linux_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "linux", help="Provision this machine as a development box"
    )
    add_output_flags(p)


def handle_linux(args: argparse.Namespace | None = None) -> int:
    start_command("linux", args)
    log = get_logger("devsetup")

    log.info(DEVSETUP_BANNER)
    log.info(f"Log file: {current_log_file()}")

    try:
        config = resolve_runner_config()
    except ConfigError as e:
        log.error(f"{SYMBOLS.FAIL} ERROR: {e}")
        return 1

    outcome = run(steps(), config)
    log_summary(outcome)

    if outcome.state == RunState.ABORTED:
        log.error("Setup aborted. Fix the error above and re-run.")
        return outcome.exit_code

    warnings = outcome.by_status(StepStatus.WARNING)
    if warnings:
        headline = f"Setup finished with {len(warnings)} warning(s)."
    else:
        headline = "All installations completed successfully!"

    log.info("")
    log.info(
        DEVSETUP_BOX(
            [headline, "", *next_steps(config)],
            title="SETUP COMPLETE",
        )
    )
    return outcome.exit_code
