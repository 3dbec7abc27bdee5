from __future__ import annotations

import shlex
from dataclasses import dataclass

from devsetup.env import RunnerConfig
from devsetup.model import ActionResult
from devsetup.subproc import EXIT_NOT_FOUND
from .common import from_command, nvm_argv, nvm_has, nvm_run, nvm_stream, pipe

NVM_INSTALL_URL = "https://raw.githubusercontent.com/nvm-sh/nvm/{version}/install.sh"


@dataclass(frozen=True)
class NpmTool:
    package: str
    binary: str
    label: str
    section: str


def install_nvm(config: RunnerConfig) -> ActionResult:
    url = NVM_INSTALL_URL.format(version=config.nvm_version)
    result = pipe(config, ["curl", "-o-", url], ["bash"])
    return from_command(
        result,
        f"NVM {config.nvm_version} installer finished",
        f"Failed to install NVM {config.nvm_version}",
    )


def load_nvm(config: RunnerConfig) -> ActionResult:
    nvm_sh = config.nvm_sh
    if not nvm_sh.is_file() or nvm_sh.stat().st_size == 0:
        return ActionResult(
            ok=False,
            detail=f"nvm.sh not found in {config.nvm_dir} - Node.js installation skipped",
            exit_code=EXIT_NOT_FOUND,
        )
    return ActionResult(ok=True, detail="NVM loaded successfully")


def nvm_version(config: RunnerConfig) -> list[str]:
    return nvm_argv(config, "nvm --version")


def install_node(config: RunnerConfig) -> ActionResult:
    v = shlex.quote(config.node_version)
    result = nvm_stream(
        config,
        f"nvm install {v} && nvm use {v} && nvm alias default {v}",
    )
    return from_command(
        result,
        f"Node.js v{config.node_version} installed and set as default",
        f"Failed to install Node.js v{config.node_version}",
    )


def verify_node(config: RunnerConfig) -> ActionResult:
    node = nvm_run(config, "node --version")
    if not node.ok:
        return ActionResult(
            ok=False,
            detail="Node.js not found in PATH",
            exit_code=node.exit_code,
            stderr=node.stderr,
        )

    npm = nvm_run(config, "npm --version")
    npm_version = npm.stdout.strip() if npm.ok else "unknown"
    return ActionResult(
        ok=True,
        detail=f"Node.js Version: {node.stdout.strip()}, npm Version: {npm_version}",
    )


def install_npm_tool(tool: NpmTool):
    def action(config: RunnerConfig) -> ActionResult:
        result = nvm_stream(config, f"npm install -g {shlex.quote(tool.package)}")
        if not result.ok:
            return from_command(result, "", f"Failed to install {tool.label}")

        if not nvm_has(config, tool.binary):
            return ActionResult(
                ok=False,
                detail=f"{tool.label} installed but command not found in PATH",
                exit_code=EXIT_NOT_FOUND,
                command=result.command_str,
                stdout=result.stdout,
                stderr=result.stderr,
                streamed=result.streamed,
            )

        return from_command(result, f"{tool.label} installed", "")

    return action


def tool_version(tool: NpmTool):
    def argv(config: RunnerConfig) -> list[str]:
        return nvm_argv(config, f"{shlex.quote(tool.binary)} --version")

    return argv
