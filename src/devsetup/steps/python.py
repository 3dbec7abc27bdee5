from __future__ import annotations

from devsetup.env import RunnerConfig
from devsetup.model import ActionResult
from devsetup.subproc import EXIT_NOT_FOUND
from .common import dnf, from_command, pipe, run, stream, which

UV_INSTALL_URL = "https://astral.sh/uv/install.sh"


def _fetcher(config: RunnerConfig) -> list[str] | None:
    if which(config, "curl") is not None:
        return ["curl", "-LsSf", UV_INSTALL_URL]
    if which(config, "wget") is not None:
        return ["wget", "-qO-", UV_INSTALL_URL]
    return None


def install_uv(config: RunnerConfig) -> ActionResult:
    fetch = _fetcher(config)
    if fetch is None:
        curl = dnf(config, "install", "curl")
        if not curl.ok:
            return from_command(curl, "", "Failed to install curl for the uv installer")
        fetch = ["curl", "-LsSf", UV_INSTALL_URL]

    result = pipe(config, fetch, ["sh"])
    return from_command(result, "uv installer finished", "Failed to install uv")


def load_uv(config: RunnerConfig) -> ActionResult:
    if which(config, "uv") is None:
        return ActionResult(
            ok=False,
            detail=f"uv not found in PATH: {config.path}",
            exit_code=EXIT_NOT_FOUND,
        )
    return ActionResult(ok=True, detail="uv installed")


def uv_version(config: RunnerConfig) -> list[str]:
    return ["uv", "--version"]


def install_python(config: RunnerConfig) -> ActionResult:
    v = config.python_version
    return from_command(
        stream(config, ["uv", "python", "install", v]),
        f"Python {v} installed via uv",
        f"Failed to install Python {v} via uv",
    )


def verify_python(config: RunnerConfig) -> ActionResult:
    v = config.python_version
    failed = f"Python {v} installation verification failed"

    listing = run(config, ["uv", "python", "list"])
    if not listing.ok:
        return from_command(listing, "", failed)

    for line in listing.stdout.splitlines():
        if v in line:
            cols = line.split()
            found = cols[1] if len(cols) > 1 else cols[0]
            return ActionResult(ok=True, detail=f"Python {v} available: {found}")

    return ActionResult(ok=False, detail=failed, exit_code=1, stdout=listing.stdout)
