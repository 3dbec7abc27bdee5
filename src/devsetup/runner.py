from __future__ import annotations

from typing import Iterable, Optional

from devsetup import subproc
from devsetup.branding import DEVSETUP_HEADER, DEVSETUP_STEP, SYMBOLS
from devsetup.env import RunnerConfig
from devsetup.logger import get_logger
from devsetup.model import (
    ActionResult,
    RunOutcome,
    RunState,
    Step,
    StepResult,
    StepStatus,
)

log = get_logger("devsetup.runner")

TAIL_LINES = 20


# ------------------------------------------------------------
# Reporting
# ------------------------------------------------------------


def _log_header(title: str) -> None:
    log.info(DEVSETUP_HEADER(title))


def _log_output(action: ActionResult) -> None:
    if action.command:
        log.debug(f"$ {action.command}")
    if action.streamed:
        return
    for stream in (action.stdout, action.stderr):
        for line in stream.splitlines():
            if line.strip():
                log.debug(line)


def _log_tail(action: ActionResult) -> None:
    # streamed stdout is already in the log
    text = action.stderr if action.streamed else (action.stderr or action.stdout)
    text = text.strip()
    if not text:
        return
    for line in text.splitlines()[-TAIL_LINES:]:
        log.warning(f"    {line}")


def report(result: StepResult) -> None:
    if result.status == StepStatus.SUCCESS:
        log.info(f"{SYMBOLS.OK} {result.detail}")
    elif result.status == StepStatus.WARNING:
        log.warning(f"{SYMBOLS.FAIL} WARNING: {result.detail}")
    else:
        log.error(f"{SYMBOLS.FAIL} ERROR: {result.detail}")


# ------------------------------------------------------------
# Core execution
# ------------------------------------------------------------


def _invoke(step: Step, config: RunnerConfig) -> ActionResult:
    try:
        return step.action(config)
    except OSError as e:
        return ActionResult(
            ok=False,
            detail=f"{step.name} failed: {e}",
            exit_code=subproc.EXIT_NOT_FOUND,
            stderr=str(e),
        )
    except UnicodeError as e:
        return ActionResult(
            ok=False,
            detail=f"{step.name} failed: unreadable output ({e})",
            exit_code=1,
            stderr=str(e),
        )


def run_step(step: Step, config: RunnerConfig) -> StepResult:
    action = _invoke(step, config)
    _log_output(action)

    if not action.ok:
        exit_code = action.exit_code or 1
        _log_tail(action)
        status = StepStatus.ERROR if step.required else StepStatus.WARNING
        return StepResult(
            step_name=step.name,
            status=status,
            detail=action.detail,
            exit_code=exit_code,
        )

    if step.version is None:
        return StepResult(
            step_name=step.name, status=StepStatus.SUCCESS, detail=action.detail
        )

    version = subproc.query_version(
        step.version(config), env_overrides=config.process_env()
    )
    if version is None:
        return StepResult(
            step_name=step.name,
            status=StepStatus.WARNING,
            detail=f"{action.detail} (installed but version unavailable)",
        )

    return StepResult(
        step_name=step.name,
        status=StepStatus.SUCCESS,
        detail=f"{action.detail}. Version: {version}",
        version=version,
    )


def _blocked_by(step: Step, done: dict[str, StepResult]) -> Optional[str]:
    if step.depends_on is None:
        return None
    dep = done.get(step.depends_on)
    if dep is not None and dep.status == StepStatus.SUCCESS:
        return None
    return step.depends_on


def run(steps: Iterable[Step], config: RunnerConfig) -> RunOutcome:
    """
    Execute steps strictly in order.

    A failing required step aborts the run; every other failure is
    recorded as a warning and the run moves on.
    """
    results: list[StepResult] = []
    done: dict[str, StepResult] = {}
    section: Optional[str] = None

    for step in steps:
        if step.section and step.section != section:
            section = step.section
            _log_header(section)

        log.info("")
        log.info(DEVSETUP_STEP(step.name))

        blocker = _blocked_by(step, done)
        if blocker is not None:
            result = StepResult(
                step_name=step.name,
                status=StepStatus.WARNING,
                detail=f"skipped: {blocker!r} did not succeed",
                exit_code=-1,
            )
        else:
            result = run_step(step, config)

        report(result)
        results.append(result)
        done[step.name] = result

        if result.status == StepStatus.ERROR:
            log.error(f"Aborting: required step failed: {step.name}")
            return RunOutcome(state=RunState.ABORTED, results=results)

    return RunOutcome(state=RunState.COMPLETED, results=results)


def log_summary(outcome: RunOutcome) -> None:
    log.info("")
    log.info("Run summary:")
    for r in outcome.results:
        log.info(f"  - {r.step_name}: {r.status.value}")

    warnings = len(outcome.by_status(StepStatus.WARNING))
    log.info("")
    log.info(
        f"Done: {outcome.state.value} "
        f"({len(outcome.results)} steps, {warnings} warnings)"
    )
