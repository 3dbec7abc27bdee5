from __future__ import annotations

import shlex

from devsetup import subproc
from devsetup.env import RunnerConfig
from devsetup.logger import get_logger
from devsetup.model import ActionResult
from devsetup.subproc import CommandResult

child_log = get_logger("devsetup.child")

# Section titles, in run order
SYSTEM = "SYSTEM PREREQUISITES"
NODE = "NODE.JS ENVIRONMENT"
AI_TOOLS = "AI CLI TOOLS"
PYTHON = "PYTHON ENVIRONMENT"
JAVA = "JAVA DEVELOPMENT KIT"
MCP = "CLAUDE MCP SERVERS"
SHELL = "SHELL CONFIGURATION"


def from_command(result: CommandResult, ok: str, failed: str) -> ActionResult:
    return ActionResult(
        ok=result.ok,
        detail=ok if result.ok else failed,
        exit_code=result.exit_code,
        command=result.command_str,
        stdout=result.stdout,
        stderr=result.stderr,
        streamed=result.streamed,
    )


def run(config: RunnerConfig, args: list[str]) -> CommandResult:
    return subproc.run(args, env_overrides=config.process_env())


def _echo(line: str) -> None:
    child_log.info(f"    {line}")


def stream(config: RunnerConfig, args: list[str]) -> CommandResult:
    """Like `run`, but child output reaches the log while the command works."""
    return subproc.stream(args, env_overrides=config.process_env(), on_line=_echo)


def pipe(config: RunnerConfig, producer: list[str], consumer: list[str]) -> CommandResult:
    return subproc.pipe(
        producer, consumer, env_overrides=config.process_env(), on_line=_echo
    )


def dnf(config: RunnerConfig, *args: str) -> CommandResult:
    return stream(config, [*config.dnf, "-y", *args])


def which(config: RunnerConfig, name: str) -> str | None:
    return subproc.which(name, path=config.path)


# ------------------------------------------------------------
# nvm-loaded shell
# ------------------------------------------------------------


def nvm_argv(config: RunnerConfig, script: str) -> list[str]:
    """
    argv for `bash -c` with nvm sourced first.

    nvm is a shell function and the active Node bin dir only lands on
    PATH once nvm.sh has run, so every Node-side command goes through here.
    """
    prelude = (
        f"export NVM_DIR={shlex.quote(str(config.nvm_dir))} && "
        f'. "$NVM_DIR/nvm.sh" >/dev/null'
    )
    return ["bash", "-c", f"{prelude} && {script}"]


def nvm_run(config: RunnerConfig, script: str) -> CommandResult:
    return run(config, nvm_argv(config, script))


def nvm_stream(config: RunnerConfig, script: str) -> CommandResult:
    return stream(config, nvm_argv(config, script))


def nvm_has(config: RunnerConfig, binary: str) -> bool:
    return nvm_run(config, f"command -v {shlex.quote(binary)}").ok
