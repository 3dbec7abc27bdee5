from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from devsetup.model import ContainerSpec, RestartPolicy

# ------------------------------------------------------------
# Defaults
# ------------------------------------------------------------

NVM_VERSION = "v0.40.3"
NODE_VERSION = "20"
PYTHON_VERSION = "3.13"
JAVA_PACKAGE = "java-21-openjdk"

MARIADB_NAME = "mariadb_dev"
MARIADB_IMAGE = "mariadb:11.4"
MARIADB_ROOT_PASSWORD = "root"
MARIADB_TZ = "Asia/Seoul"
MARIADB_HOST_PORT = 33333
MARIADB_CONTAINER_PORT = 3306
MARIADB_ARGS = (
    "--character-set-server=utf8",
    "--collation-server=utf8_general_ci",
)

# ------------------------------------------------------------
# Minimal dotenv loader (read-only helper, bootstrap owns usage)
# ------------------------------------------------------------


def _load_dotenv(path: Path) -> None:
    """
    Minimal dotenv loader.
    - Silent
    - Never overrides existing os.environ
    """
    if not path.exists():
        return

    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        k, v = line.split("=", 1)
        k = k.strip()
        if k.startswith("export "):
            k = k[len("export ") :].strip()
        v = v.strip()

        # strip inline comments
        if " #" in v:
            v = v.split(" #", 1)[0].rstrip()
        elif "\t#" in v:
            v = v.split("\t#", 1)[0].rstrip()

        # strip quotes
        if len(v) >= 2 and v[0] == v[-1] and v[0] in ("'", '"'):
            v = v[1:-1]

        if k and k not in os.environ:
            os.environ[k] = v


# ------------------------------------------------------------
# Errors / helpers
# ------------------------------------------------------------


class ConfigError(RuntimeError):
    pass


def _as_bool(v: str) -> bool:
    return v.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(v: str, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return default


def _as_port(name: str, v: str) -> int:
    try:
        port = int(v)
    except ValueError:
        raise ConfigError(f"{name} must be a port number, got {v!r}") from None
    if not 0 < port < 65536:
        raise ConfigError(f"{name} out of range: {port}")
    return port


# ------------------------------------------------------------
# Logging environment (SAFE ANYWHERE)
# ------------------------------------------------------------


@dataclass(frozen=True)
class LoggingEnvironment:
    log_level: str
    log_retention: int
    verbose: bool
    quiet: bool


def get_logging_env() -> LoggingEnvironment:
    return LoggingEnvironment(
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        log_retention=_as_int(os.environ.get("LOG_RETENTION", "30"), 30),
        verbose=_as_bool(os.environ.get("DEVSETUP_VERBOSE", "0")),
        quiet=_as_bool(os.environ.get("DEVSETUP_QUIET", "0")),
    )


# ------------------------------------------------------------
# Runner configuration (resolved once per run)
# ------------------------------------------------------------


@dataclass(frozen=True)
class RunnerConfig:
    home: Path
    xdg_config_home: Optional[Path]
    path: str
    is_root: bool
    dnf: tuple[str, ...]
    nvm_dir: Path
    nvm_version: str
    node_version: str
    python_version: str
    java_package: str

    @property
    def bashrc(self) -> Path:
        return self.home / ".bashrc"

    @property
    def nvm_sh(self) -> Path:
        return self.nvm_dir / "nvm.sh"

    @property
    def dnf_display(self) -> str:
        return " ".join(self.dnf)

    def process_env(self) -> dict[str, str]:
        """Overrides handed to every child process."""
        return {
            "HOME": str(self.home),
            "PATH": self.path,
        }


def _effective_uid() -> int:
    return os.geteuid() if hasattr(os, "geteuid") else 0


def resolve_runner_config(
    environ: Mapping[str, str] | None = None,
    *,
    uid: int | None = None,
) -> RunnerConfig:
    """
    Single read of HOME / XDG_CONFIG_HOME / PATH for a provisioning run.

    Steps only ever see the returned snapshot.
    """
    environ = os.environ if environ is None else environ

    raw_home = environ.get("HOME")
    if not raw_home:
        raise ConfigError("HOME is not set")
    home = Path(raw_home)

    raw_xdg = environ.get("XDG_CONFIG_HOME") or ""
    xdg_config_home = Path(raw_xdg) if raw_xdg else None
    nvm_dir = xdg_config_home / "nvm" if xdg_config_home else home / ".nvm"

    local_bin = home / ".local" / "bin"
    base_path = environ.get("PATH", "")
    path = f"{local_bin}{os.pathsep}{base_path}" if base_path else str(local_bin)

    if uid is None:
        uid = _effective_uid()
    is_root = uid == 0

    return RunnerConfig(
        home=home,
        xdg_config_home=xdg_config_home,
        path=path,
        is_root=is_root,
        dnf=("dnf",) if is_root else ("sudo", "dnf"),
        nvm_dir=nvm_dir,
        nvm_version=environ.get("DEVSETUP_NVM_VERSION") or NVM_VERSION,
        node_version=environ.get("DEVSETUP_NODE_VERSION") or NODE_VERSION,
        python_version=environ.get("DEVSETUP_PYTHON_VERSION") or PYTHON_VERSION,
        java_package=environ.get("DEVSETUP_JAVA_PACKAGE") or JAVA_PACKAGE,
    )


# ------------------------------------------------------------
# MariaDB container
# ------------------------------------------------------------


def resolve_mariadb_spec(environ: Mapping[str, str] | None = None) -> ContainerSpec:
    environ = os.environ if environ is None else environ

    host_port = MARIADB_HOST_PORT
    raw_port = environ.get("DEVSETUP_MARIADB_PORT")
    if raw_port:
        host_port = _as_port("DEVSETUP_MARIADB_PORT", raw_port)

    raw_policy = environ.get("DEVSETUP_MARIADB_RESTART") or RestartPolicy.ALWAYS.value
    try:
        policy = RestartPolicy(raw_policy)
    except ValueError:
        raise ConfigError(f"Unknown restart policy: {raw_policy!r}") from None

    volumes: tuple[tuple[str, str], ...] = ()
    raw_volume = environ.get("DEVSETUP_MARIADB_VOLUME")
    if raw_volume:
        volumes = ((str(Path(raw_volume).expanduser()), "/var/lib/mysql"),)

    return ContainerSpec(
        name=environ.get("DEVSETUP_MARIADB_NAME") or MARIADB_NAME,
        image=environ.get("DEVSETUP_MARIADB_IMAGE") or MARIADB_IMAGE,
        env={
            "MYSQL_ROOT_PASSWORD": environ.get("DEVSETUP_MARIADB_ROOT_PASSWORD")
            or MARIADB_ROOT_PASSWORD,
            "TZ": environ.get("DEVSETUP_MARIADB_TZ") or MARIADB_TZ,
        },
        ports=((host_port, MARIADB_CONTAINER_PORT),),
        restart_policy=policy,
        volumes=volumes,
        network=environ.get("DEVSETUP_MARIADB_NETWORK") or None,
        args=MARIADB_ARGS,
    )


# ------------------------------------------------------------
# Full runtime environment (env dump)
# ------------------------------------------------------------


class Environment:
    def __init__(self):
        # Logging snapshot (immutable)
        self._logging = get_logging_env()

        self.command = os.environ.get("DEVSETUP_COMMAND", "bootstrap")
        self.run_id = os.environ.get("DEVSETUP_RUN_ID", "")
        self.runner = resolve_runner_config()
        self.mariadb = resolve_mariadb_spec()

    def as_dict(self) -> dict:
        return {
            "Logging": {
                "log_level": self.log_level,
                "log_retention": self.log_retention,
                "verbose": self.verbose,
                "quiet": self.quiet,
            },
            "Run": {
                "command": self.command,
                "run_id": self.run_id,
                "interactive": sys.stdout.isatty(),
            },
            "Runner": {
                "home": str(self.runner.home),
                "xdg_config_home": str(self.runner.xdg_config_home or ""),
                "dnf": self.runner.dnf_display,
                "nvm_dir": str(self.runner.nvm_dir),
                "nvm_version": self.runner.nvm_version,
                "node_version": self.runner.node_version,
                "python_version": self.runner.python_version,
                "java_package": self.runner.java_package,
                "bashrc": str(self.runner.bashrc),
            },
            "MariaDB": {
                "name": self.mariadb.name,
                "image": self.mariadb.image,
                "ports": ", ".join(f"{h}:{c}" for h, c in self.mariadb.ports),
                "restart": self.mariadb.restart_policy.value,
                "network": self.mariadb.network or "",
                "root_password": "***",
            },
        }

    # ---- logging passthrough ----
    @property
    def log_level(self) -> str:
        return self._logging.log_level

    @property
    def log_retention(self) -> int:
        return self._logging.log_retention

    @property
    def verbose(self) -> bool:
        return self._logging.verbose

    @property
    def quiet(self) -> bool:
        return self._logging.quiet


_ENV: Optional[Environment] = None


def reset_env_caches() -> None:
    """Invalidate cached views of environment variables."""
    global _ENV
    _ENV = None


def get_env() -> Environment:
    global _ENV
    if _ENV is None:
        _ENV = Environment()
    return _ENV
