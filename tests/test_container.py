from devsetup import container, subproc
from devsetup.env import resolve_mariadb_spec
from devsetup.model import ContainerSpec, RestartPolicy
from devsetup.subproc import CommandResult


def test_run_argv_for_mariadb_defaults():
    argv = container.run_argv(resolve_mariadb_spec({}))

    assert argv == [
        "docker", "run", "--name", "mariadb_dev",
        "-e", "MYSQL_ROOT_PASSWORD=root",
        "-e", "TZ=Asia/Seoul",
        "-p", "33333:3306",
        "--restart", "always",
        "-d", "mariadb:11.4",
        "--character-set-server=utf8",
        "--collation-server=utf8_general_ci",
    ]


def test_run_argv_with_volume_and_network():
    spec = ContainerSpec(
        name="db",
        image="img:1",
        volumes=(("/data", "/var/lib/mysql"),),
        network="devnet",
        restart_policy=RestartPolicy.NO,
    )

    argv = container.run_argv(spec)

    assert argv == [
        "docker", "run", "--name", "db",
        "-v", "/data:/var/lib/mysql",
        "--network=devnet",
        "--restart", "no",
        "-d", "img:1",
    ]


def test_launch_success_queries_status(monkeypatch):
    calls = []

    def fake_run(args, **kw):
        calls.append(args)
        if args[1] == "run":
            return CommandResult(" ".join(args), "abc123\n", "", 0)
        return CommandResult(" ".join(args), "CONTAINER ID   NAMES\nabc123   mariadb_dev\n", "", 0)

    monkeypatch.setattr(subproc, "run", fake_run)

    result = container.launch(resolve_mariadb_spec({}))

    assert result.ok is True
    assert result.exit_code == 0
    assert result.detail == "abc123"
    assert "mariadb_dev" in result.container_status
    assert calls[1] == ["docker", "ps", "-f", "name=mariadb_dev"]


def test_launch_failure_skips_status(monkeypatch):
    calls = []

    def fake_run(args, **kw):
        calls.append(args)
        return CommandResult(" ".join(args), "", "Conflict. The container name is already in use\n", 125)

    monkeypatch.setattr(subproc, "run", fake_run)

    result = container.launch(resolve_mariadb_spec({}))

    assert result.ok is False
    assert result.exit_code == 125
    assert result.container_status is None
    assert "already in use" in result.detail
    assert len(calls) == 1
