"""bootstrap.py

Process bootstrap for devsetup.

Rules:
1) Only bootstrap is allowed to *mutate* os.environ for shared run context.
2) Call bootstrap_base_env() exactly once at the true entrypoint.
3) Call bootstrap_run_context() after argparse parsing, before init_logging().

Everything else reads configuration through devsetup.env.
"""

from __future__ import annotations

import os
from datetime import datetime

from devsetup.env import _load_dotenv, dotenv_file, reset_env_caches


_BOOTSTRAPPED = False


def bootstrap_base_env() -> None:
    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return

    # Optional: a missing dotenv file just means "use the shell environment".
    _load_dotenv(dotenv_file())

    os.environ.setdefault(
        "DEVSETUP_RUN_ID",
        datetime.now().strftime("%Y-%m-%d_%H-%M-%S"),
    )

    reset_env_caches()
    _BOOTSTRAPPED = True


def bootstrap_run_context(
    *,
    command: str,
    verbose: bool | None = None,
    quiet: bool | None = None,
) -> None:
    """Establish run-scoped context used by logging + the runner."""

    os.environ["DEVSETUP_COMMAND"] = command

    if verbose is not None:
        os.environ["DEVSETUP_VERBOSE"] = "1" if verbose else "0"
    if quiet is not None:
        os.environ["DEVSETUP_QUIET"] = "1" if quiet else "0"

    # Context changes must invalidate cached env views.
    reset_env_caches()
