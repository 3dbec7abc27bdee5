import logging

import pytest


@pytest.fixture(autouse=True)
def clean_env_and_logging(monkeypatch, tmp_path):
    """
    Ensure tests don't leak env, logger state, or a user's dotenv file.
    """

    keys = [
        "DEVSETUP_LOGS_DIR",
        "DEVSETUP_ENV_FILE",
        "DEVSETUP_COMMAND",
        "DEVSETUP_RUN_ID",
        "DEVSETUP_VERBOSE",
        "DEVSETUP_QUIET",
        "DEVSETUP_NVM_VERSION",
        "DEVSETUP_NODE_VERSION",
        "DEVSETUP_PYTHON_VERSION",
        "DEVSETUP_JAVA_PACKAGE",
        "DEVSETUP_MARIADB_NAME",
        "DEVSETUP_MARIADB_IMAGE",
        "DEVSETUP_MARIADB_ROOT_PASSWORD",
        "DEVSETUP_MARIADB_TZ",
        "DEVSETUP_MARIADB_PORT",
        "DEVSETUP_MARIADB_RESTART",
        "DEVSETUP_MARIADB_VOLUME",
        "DEVSETUP_MARIADB_NETWORK",
        "LOG_LEVEL",
        "LOG_RETENTION",
        "XDG_CONFIG_HOME",
        "XDG_STATE_HOME",
    ]
    for k in keys:
        monkeypatch.delenv(k, raising=False)

    monkeypatch.setenv("DEVSETUP_LOGS_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("DEVSETUP_ENV_FILE", str(tmp_path / "missing.env"))

    # Keep the Rich console out of test output
    monkeypatch.setenv("DEVSETUP_QUIET", "1")

    import devsetup.bootstrap
    import devsetup.env
    import devsetup.logger.state

    devsetup.bootstrap._BOOTSTRAPPED = False
    devsetup.env.reset_env_caches()

    yield

    devsetup.logger.state.INITIALIZED = False
    devsetup.logger.state.RUN_ID = None
    devsetup.logger.state.LOG_DIR = None
    devsetup.logger.state.LOG_FILE_PATH = None

    from rich.logging import RichHandler

    root = logging.getLogger()
    for h in list(root.handlers):
        if isinstance(h, (logging.FileHandler, RichHandler)):
            h.close()
            root.removeHandler(h)


@pytest.fixture
def home(tmp_path, monkeypatch):
    h = tmp_path / "home"
    h.mkdir()
    monkeypatch.setenv("HOME", str(h))
    return h
