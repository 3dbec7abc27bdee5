from devsetup.env.env import (
    ConfigError,
    Environment,
    LoggingEnvironment,
    RunnerConfig,
    _load_dotenv,
    get_env,
    get_logging_env,
    reset_env_caches,
    resolve_mariadb_spec,
    resolve_runner_config,
)

from devsetup.env.paths import command_logs_dir, dotenv_file, logs_dir

__all__ = [
    "ConfigError",
    "Environment",
    "LoggingEnvironment",
    "RunnerConfig",
    "get_env",
    "get_logging_env",
    "reset_env_caches",
    "resolve_mariadb_spec",
    "resolve_runner_config",
    "command_logs_dir",
    "dotenv_file",
    "logs_dir",
    "_load_dotenv",
]
