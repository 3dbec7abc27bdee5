import io
import subprocess
import sys

import pytest
from rich.console import Console

from devsetup import subproc
from devsetup.cli.cli_steps import build_steps_table
from devsetup.logger import current_log_file
from devsetup.main import main, main_linux, main_mariadb
from devsetup.model import LaunchResult
from devsetup.steps import steps


def _log_text():
    path = current_log_file()
    assert path is not None
    return path.read_text()


def test_no_arg_entry_points_reject_arguments(capsys):
    assert main_linux(["--force"]) == 1
    assert main_mariadb(["extra"]) == 1
    assert "takes no arguments" in capsys.readouterr().err


def test_linux_without_dnf_exits_1(home, monkeypatch):
    monkeypatch.setattr(subproc, "which", lambda name, path=None: None)

    def no_commands(*a, **kw):
        raise AssertionError("no external command may run")

    monkeypatch.setattr(subproc, "run", no_commands)
    monkeypatch.setattr(subproc, "stream", no_commands)
    monkeypatch.setattr(subproc, "pipe", no_commands)

    assert main_linux([]) == 1
    text = _log_text()
    assert "dnf command not found" in text
    assert "Setup aborted" in text


def test_mariadb_success_prints_status(monkeypatch):
    monkeypatch.setattr(
        "devsetup.cli.cli_mariadb.launch",
        lambda spec: LaunchResult(
            ok=True, exit_code=0, detail="abc", container_status="abc   mariadb_dev   Up 1s"
        ),
    )

    assert main(["mariadb"]) == 0
    text = _log_text()
    assert "MariaDB container started successfully" in text
    assert "Up 1s" in text
    assert "docker exec -it mariadb_dev mariadb -u root -p" in text


def test_mariadb_failure_exits_nonzero_without_status(monkeypatch):
    monkeypatch.setattr(
        "devsetup.cli.cli_mariadb.launch",
        lambda spec: LaunchResult(ok=False, exit_code=125, detail="name in use"),
    )

    assert main_mariadb([]) == 1
    text = _log_text()
    assert "Failed to start MariaDB container" in text
    assert "Container Status" not in text


def test_mariadb_bad_config_exits_1(monkeypatch):
    monkeypatch.setenv("DEVSETUP_MARIADB_PORT", "nope")

    def never(spec):
        raise AssertionError("launch called with bad config")

    monkeypatch.setattr("devsetup.cli.cli_mariadb.launch", never)
    assert main(["mariadb"]) == 1


def test_steps_listing(capsys):
    assert main(["steps"]) == 0


def test_steps_table_shows_descriptions():
    console = Console(file=io.StringIO(), width=240)
    console.print(build_steps_table(steps()))
    out = console.file.getvalue()

    assert "Description" in out
    assert "dnf must be on PATH (Rocky Linux)" in out
    assert "uv must be on PATH" in out
    assert "npm install -g pnpm" in out
    assert "Up-to-date library documentation" in out


def test_env_dump(home):
    assert main(["env", "dump"]) == 0


def test_unknown_command_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["frobnicate"])
    assert exc.value.code == 2


def test_help_routes(capsys):
    assert main(["help"]) == 0
    assert main(["help", "linux"]) == 0
    assert "--verbose" in capsys.readouterr().out


def test_module_help_runs():
    result = subprocess.run(
        [sys.executable, "-m", "devsetup", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "mariadb" in result.stdout
