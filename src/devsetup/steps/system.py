from __future__ import annotations

from devsetup.env import RunnerConfig
from devsetup.model import ActionResult
from devsetup.subproc import EXIT_NOT_FOUND
from .common import dnf, from_command, which


def check_dnf(config: RunnerConfig) -> ActionResult:
    if which(config, "dnf") is None:
        return ActionResult(
            ok=False,
            detail="dnf command not found. Please run on Rocky Linux.",
            exit_code=EXIT_NOT_FOUND,
        )
    return ActionResult(ok=True, detail="DNF is available")


def dnf_command(config: RunnerConfig) -> ActionResult:
    if config.is_root:
        return ActionResult(ok=True, detail="Using: dnf (running as root)")
    return ActionResult(ok=True, detail=f"Using: {config.dnf_display}")


def update_packages(config: RunnerConfig) -> ActionResult:
    return from_command(
        dnf(config, "update"),
        "System packages updated",
        "Failed to update system packages",
    )


def install_package(package: str, label: str):
    def action(config: RunnerConfig) -> ActionResult:
        return from_command(
            dnf(config, "install", package),
            f"{label} installed",
            f"Failed to install {label}",
        )

    return action


def ensure_curl(config: RunnerConfig) -> ActionResult:
    if which(config, "curl") is not None:
        return ActionResult(ok=True, detail="curl already available")
    return install_package("curl", "curl")(config)


def install_jdk(config: RunnerConfig) -> ActionResult:
    return from_command(
        dnf(config, "install", config.java_package),
        f"{config.java_package} installed",
        f"Failed to install {config.java_package}",
    )
