from __future__ import annotations

from devsetup.env import RunnerConfig
from devsetup.model import ActionResult
from devsetup.shellrc import ALIAS_BLOCK, ALIAS_MARKER, ensure_block


def configure_aliases(config: RunnerConfig) -> ActionResult:
    bashrc = config.bashrc
    if ensure_block(bashrc, ALIAS_MARKER, ALIAS_BLOCK):
        return ActionResult(ok=True, detail=f"Added 'll' alias to {bashrc}")
    return ActionResult(ok=True, detail=f"'ll' alias already exists in {bashrc}")
