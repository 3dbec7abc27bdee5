from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------
# Base directories (override-friendly)
# ---------------------------------------------------------------------


def _home() -> Path:
    return Path(os.environ.get("HOME") or Path.home())


def _xdg_dir(env_var: str, fallback: str) -> Path:
    raw = os.environ.get(env_var)
    return Path(raw).expanduser() if raw else _home() / fallback


def logs_dir() -> Path:
    """
    Root log directory. DEVSETUP_LOGS_DIR wins over the XDG state dir.
    """
    raw = os.environ.get("DEVSETUP_LOGS_DIR")
    if raw:
        return Path(raw).expanduser().resolve()
    return (_xdg_dir("XDG_STATE_HOME", ".local/state") / "devsetup" / "logs").resolve()


def dotenv_file() -> Path:
    raw = os.environ.get("DEVSETUP_ENV_FILE")
    if raw:
        return Path(raw).expanduser()
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / "devsetup" / ".env"


# ---------------------------------------------------------------------
# Log layout helpers (used by logger)
# ---------------------------------------------------------------------


def command_logs_dir(command: str) -> Path:
    """
    Base log directory for a CLI command (e.g. linux, mariadb).
    """
    path = logs_dir() / command
    path.mkdir(parents=True, exist_ok=True)
    return path
