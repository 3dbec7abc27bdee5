import sys

import pytest

from devsetup import runner, subproc
from devsetup.env import resolve_runner_config
from devsetup.model import ActionResult, RunState, Step, StepStatus
from devsetup.steps.common import from_command


@pytest.fixture
def config(tmp_path):
    return resolve_runner_config({"HOME": str(tmp_path), "PATH": "/usr/bin"}, uid=1000)


def _ok(detail="done"):
    return lambda config: ActionResult(ok=True, detail=detail)


def _fail(detail="boom", exit_code=2):
    return lambda config: ActionResult(ok=False, detail=detail, exit_code=exit_code)


def _recording(calls, name, action):
    def wrapped(config):
        calls.append(name)
        return action(config)

    return wrapped


def test_all_success_completes(config):
    steps = [Step(name=f"s{i}", action=_ok()) for i in range(3)]

    outcome = runner.run(steps, config)

    assert outcome.state == RunState.COMPLETED
    assert outcome.exit_code == 0
    assert [r.step_name for r in outcome.results] == ["s0", "s1", "s2"]
    assert all(r.status == StepStatus.SUCCESS for r in outcome.results)


def test_optional_failure_is_warning_and_run_continues(config):
    calls = []
    steps = [
        Step(name="a", action=_recording(calls, "a", _fail())),
        Step(name="b", action=_recording(calls, "b", _ok())),
    ]

    outcome = runner.run(steps, config)

    assert calls == ["a", "b"]
    assert outcome.state == RunState.COMPLETED
    assert outcome.exit_code == 0
    assert outcome.results[0].status == StepStatus.WARNING
    assert outcome.results[0].exit_code == 2
    assert outcome.results[1].status == StepStatus.SUCCESS


def test_required_failure_aborts_before_later_steps(config):
    calls = []
    steps = [
        Step(name="pre", action=_recording(calls, "pre", _fail("missing")), required=True),
        Step(name="after", action=_recording(calls, "after", _ok())),
    ]

    outcome = runner.run(steps, config)

    assert calls == ["pre"]
    assert outcome.state == RunState.ABORTED
    assert outcome.exit_code == 1
    assert len(outcome.results) == 1
    assert outcome.results[0].status == StepStatus.ERROR
    assert outcome.results[0].detail == "missing"


def test_required_success_does_not_abort(config):
    steps = [
        Step(name="pre", action=_ok(), required=True),
        Step(name="next", action=_fail()),
    ]

    outcome = runner.run(steps, config)

    assert outcome.state == RunState.COMPLETED
    assert [r.status for r in outcome.results] == [StepStatus.SUCCESS, StepStatus.WARNING]


def test_dependent_step_skipped_when_dependency_fails(config):
    calls = []
    steps = [
        Step(name="load", action=_fail()),
        Step(name="use", action=_recording(calls, "use", _ok()), depends_on="load"),
    ]

    outcome = runner.run(steps, config)

    assert calls == []
    assert outcome.state == RunState.COMPLETED
    assert outcome.results[1].status == StepStatus.WARNING
    assert "skipped" in outcome.results[1].detail


def test_dependent_step_runs_when_dependency_succeeds(config):
    steps = [
        Step(name="load", action=_ok()),
        Step(name="use", action=_ok("used"), depends_on="load"),
    ]

    outcome = runner.run(steps, config)

    assert outcome.results[1].status == StepStatus.SUCCESS
    assert outcome.results[1].detail == "used"


def test_version_is_attached_on_success(config, monkeypatch):
    monkeypatch.setattr(subproc, "query_version", lambda args, env_overrides=None: "tool 1.2.3")
    steps = [Step(name="t", action=_ok("tool installed"), version=lambda c: ["tool", "--version"])]

    outcome = runner.run(steps, config)

    r = outcome.results[0]
    assert r.status == StepStatus.SUCCESS
    assert r.version == "tool 1.2.3"
    assert "tool 1.2.3" in r.detail


def test_missing_version_downgrades_to_warning(config, monkeypatch):
    monkeypatch.setattr(subproc, "query_version", lambda args, env_overrides=None: None)
    steps = [Step(name="t", action=_ok(), version=lambda c: ["tool", "--version"])]

    outcome = runner.run(steps, config)

    assert outcome.state == RunState.COMPLETED
    assert outcome.results[0].status == StepStatus.WARNING
    assert outcome.results[0].version is None


def test_version_not_queried_after_failure(config, monkeypatch):
    def explode(*a, **kw):
        raise AssertionError("version queried for a failed step")

    monkeypatch.setattr(subproc, "query_version", explode)
    steps = [Step(name="t", action=_fail(), version=lambda c: ["tool", "--version"])]

    outcome = runner.run(steps, config)

    assert outcome.results[0].status == StepStatus.WARNING


def test_oserror_in_action_follows_required_rule(config):
    def broken(config):
        raise PermissionError("denied")

    optional = runner.run([Step(name="o", action=broken), Step(name="n", action=_ok())], config)
    assert optional.state == RunState.COMPLETED
    assert optional.results[0].status == StepStatus.WARNING
    assert optional.results[0].exit_code == subproc.EXIT_NOT_FOUND

    required = runner.run([Step(name="r", action=broken, required=True)], config)
    assert required.state == RunState.ABORTED


def test_summary_counts_warnings(config):
    outcome = runner.run(
        [Step(name="a", action=_ok()), Step(name="b", action=_fail())], config
    )
    assert len(outcome.by_status(StepStatus.WARNING)) == 1
    assert len(outcome.by_status(StepStatus.SUCCESS)) == 1
    runner.log_summary(outcome)


def test_undecodable_child_output_does_not_stop_the_run(config):
    def noisy(config):
        result = subproc.run(
            [sys.executable, "-c", "import sys; sys.stdout.buffer.write(b'ok \\xff\\xfe\\n')"]
        )
        return from_command(result, "noisy done", "noisy failed")

    outcome = runner.run(
        [Step(name="noisy", action=noisy), Step(name="next", action=_ok())], config
    )

    assert outcome.state == RunState.COMPLETED
    assert len(outcome.results) == 2
    assert outcome.results[0].status == StepStatus.SUCCESS


def test_decode_error_in_action_is_a_failure(config):
    def broken(config):
        return b"\xff".decode("utf-8")

    outcome = runner.run(
        [Step(name="broken", action=broken), Step(name="next", action=_ok())], config
    )

    assert outcome.state == RunState.COMPLETED
    assert outcome.results[0].status == StepStatus.WARNING
    assert "unreadable output" in outcome.results[0].detail


def test_streamed_output_is_not_logged_twice(config, caplog):
    action = lambda config: ActionResult(
        ok=True, detail="done", command="dnf", stdout="Complete!", streamed=True
    )

    with caplog.at_level("DEBUG"):
        runner.run([Step(name="s", action=action)], config)

    assert not any("Complete!" in r.getMessage() for r in caplog.records)
